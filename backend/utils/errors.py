from fastapi import status


class AuthError(Exception):
    """
    Expected account outcome.
    Rendered as {"success": false, "message": ..., "error": code}.
    """

    code = "AuthError"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request could not be completed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidRole(AuthError):
    code = "InvalidRole"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid role specified. Please select User, Seller, or Admin."


class NotFound(AuthError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    message = "Account not found"


class WrongRoleStore(AuthError):
    code = "WrongRoleStore"
    status_code = status.HTTP_403_FORBIDDEN
    message = "This account is registered under a different role."


class InvalidCredential(AuthError):
    code = "InvalidCredential"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class PendingApproval(AuthError):
    code = "PendingApproval"
    status_code = status.HTTP_403_FORBIDDEN
    message = "Your seller account is awaiting admin approval."


class Rejected(AuthError):
    code = "Rejected"
    status_code = status.HTTP_403_FORBIDDEN
    message = "Your seller application has been rejected. Please contact support."


class InconsistentApprovalState(AuthError):
    code = "InconsistentApprovalState"
    status_code = status.HTTP_403_FORBIDDEN
    message = "Your seller account is not active. Please contact support."


class DuplicateAccount(AuthError):
    code = "DuplicateAccount"
    status_code = status.HTTP_409_CONFLICT
    message = "An account with this email or phone already exists"


class StoreUnavailable(AuthError):
    # only fatal member; never carries driver text
    code = "StoreUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Service temporarily unavailable. Please try again."
