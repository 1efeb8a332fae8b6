"""Custom exception classes for the RBAC admin API."""

from fastapi import HTTPException, status


class RBACAdminError(Exception):
    """Base exception for RBAC Admin."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(RBACAdminError):
    """Raised when authentication fails."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(RBACAdminError):
    """Raised when user lacks permission."""
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(RBACAdminError):
    """Raised when input validation fails."""
    pass


class DuplicateNameError(ValidationError):
    """Raised when a role name is already taken."""
    pass


class DuplicateEmailError(ValidationError):
    """Raised when a user email is already taken."""
    pass


class InvalidRoleError(ValidationError):
    """Raised when a referenced role does not exist or cannot be assigned."""
    pass


class InvalidPermissionError(ValidationError):
    """Raised when a permission token is outside the vocabulary."""
    pass


class ResourceNotFoundError(RBACAdminError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(RBACAdminError):
    """Raised when an operation is blocked by another resource's state."""
    status_code = status.HTTP_409_CONFLICT


class RoleInUseError(ResourceConflictError):
    """Raised when deleting a role that users still reference."""
    pass


class SelfDeletionError(ResourceConflictError):
    """Raised when a user tries to delete their own account."""
    pass


class LockoutError(ResourceConflictError):
    """Raised when a change would strip the acting user of their admin rights."""
    pass


class StorageError(RBACAdminError):
    """Raised when the database operation fails."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# HTTP exception shortcuts
def forbidden(detail: str = "Insufficient permissions") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
