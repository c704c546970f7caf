"""
Error taxonomy.

Every failure a handler can raise maps to one HTTP status and a
human-readable message. main.py renders them as:

    {"success": false, "message": "..."}
"""

from fastapi import status


class PortalError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class DuplicateIdentity(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Client with this email or phone number already exists."


class InvalidCode(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid OTP."


class Unauthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class InvalidToken(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token."


class NotVerified(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account not verified. Please complete email and phone verification."


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Client not found."


class DeliveryFailure(PortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Could not deliver verification codes."
