"""
Use cases for the socialnet API.

Each service module orchestrates the repository and core adapters to
implement business rules (register, login, follow, edit profile, ...).
Routers call these services instead of touching the database directly.
"""
