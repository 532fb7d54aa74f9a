"""
Core utilities shared across the socialnet API.

This package hosts configuration, logging setup, password hashing, session
token signing, the error taxonomy and the object storage adapter. Services
depend on these primitives instead of reading os.environ or talking to
third-party SDKs directly.
"""
