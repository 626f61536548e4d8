from typing import Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail, headers=headers)


class ValidationFailure(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad Request"


class MissingField(ValidationFailure):
    pass


class AuthenticationFailure(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class MissingHeader(AuthenticationFailure):
    default_detail = "Missing Authorization header"


class MalformedHeader(AuthenticationFailure):
    default_detail = "Authorization header must use Bearer scheme"


class InvalidSignatureOrFormat(AuthenticationFailure):
    # Tokens never expire, the message still says so.
    default_detail = "Invalid or expired token"


class UnknownEmail(AuthenticationFailure):
    default_detail = "No user with that email"


class WrongSecret(AuthenticationFailure):
    default_detail = "Incorrect password"


class AuthorizationFailure(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NoRoleClaim(AuthorizationFailure):
    default_detail = "No role found in token"


class InsufficientRole(AuthorizationFailure):
    def __init__(self, required_roles, presented_role):
        super().__init__(
            f"Insufficient permissions. Required role(s): {', '.join(required_roles)}, "
            f"but user has role: {presented_role}"
        )


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not Found"


class ConflictFailure(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class DuplicateEmail(ConflictFailure):
    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")


class StorageFailure(ApiError):
    """Persistence-layer failure. Only the generic detail ever reaches the client."""
