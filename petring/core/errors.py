from fastapi import status


class PetringError(Exception):
    """
    Base class for every failure the core reports to the request layer.
    `status_code` is the HTTP status the app's exception handler uses.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(PetringError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid bot token"


class AlreadyConfigured(PetringError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Bot already setup"


class NotConfigured(PetringError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Bot not setup"


class Revoked(PetringError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token revoked"


class InvalidSignature(PetringError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class Expired(PetringError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token expired"


class InvalidFormat(PetringError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid token type"


class NotFound(PetringError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class AlreadyExists(PetringError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists"


class InvalidUrl(PetringError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid url"


class NotModified(PetringError):
    status_code = status.HTTP_304_NOT_MODIFIED
    default_message = "No changes made"
