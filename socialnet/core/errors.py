"""
Client-facing error taxonomy.

Every subclass carries the HTTP status it maps to and a message that is safe to
return to the caller. Anything that is not a SocialError is treated as an
internal failure by the app's exception handlers.
"""


class SocialError(Exception):
    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SocialError):
    default_message = "Invalid request"


class ConflictError(SocialError):
    default_message = "Email already in use"


class InvalidCredentialsError(SocialError):
    default_message = "Invalid email or password"


class NotFoundError(SocialError):
    status_code = 404
    default_message = "User not found"


class SelfReferenceError(SocialError):
    default_message = "You cannot follow/unfollow yourself"


class UnauthorizedError(SocialError):
    status_code = 401
    default_message = "User not authenticated"
