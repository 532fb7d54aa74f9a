"""Client-side consumers of the socialnet API: HTTP client and state store."""
from socialnet.client.api_client import ApiError, SocialApiClient
from socialnet.client.store import AuthState, AuthStore

__all__ = ["ApiError", "SocialApiClient", "AuthState", "AuthStore"]
