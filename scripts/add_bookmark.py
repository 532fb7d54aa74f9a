#!/usr/bin/env python3
"""
Bookmark a post for a user.

Usage:
  python scripts/add_bookmark.py --user bob@example.com --post <post id> [--remove]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the socialnet package importable when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from socialnet.repositories.sql_repository import SQLRepository  # noqa: E402
from socialnet.services.auth_service import normalize_email  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Add or remove a bookmark")
    ap.add_argument("--user", required=True, help="user's e-mail")
    ap.add_argument("--post", required=True, help="post id")
    ap.add_argument("--remove", action="store_true", help="remove instead of add")
    args = ap.parse_args()

    repo = SQLRepository()
    user = repo.get_user_by_email(normalize_email(args.user))
    if not user:
        raise SystemExit(f"User '{args.user}' does not exist")
    if not repo.get_post(args.post):
        raise SystemExit(f"Post '{args.post}' does not exist")

    if args.remove:
        repo.remove_bookmark(user.id, args.post)
        print("OK: bookmark removed")
    else:
        repo.add_bookmark(user.id, args.post)
        print("OK: bookmark added")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
