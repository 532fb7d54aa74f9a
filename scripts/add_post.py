#!/usr/bin/env python3
"""
Create a post for an existing user directly in the database.

Posts are not created through the HTTP API; this script seeds them.

Usage:
  python scripts/add_post.py --author alice@example.com --content "hello" [--image URL]
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
    ap = argparse.ArgumentParser(description="Create a post")
    ap.add_argument("--author", required=True, help="author's e-mail")
    ap.add_argument("--content", required=True, help="post text")
    ap.add_argument("--image", help="optional image URL")
    args = ap.parse_args()

    repo = SQLRepository()
    author = repo.get_user_by_email(normalize_email(args.author))
    if not author:
        raise SystemExit(f"User '{args.author}' does not exist")
    content = (args.content or "").strip()
    if not content:
        raise SystemExit("Content must not be empty")

    post = repo.create_post(author.id, content, (args.image or "").strip() or None)
    print("OK: post created")
    print(f"  ID: {post.id}")
    print(f"  Author: {author.username} ({author.id})")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
