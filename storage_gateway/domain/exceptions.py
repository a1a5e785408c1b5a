"""
Domain exceptions for the storage gateway.

Every error carries a human readable ``message`` (returned to clients in the
``{"error": ...}`` envelope) and a machine ``code`` used to pick the HTTP
status in ``storage_gateway.api.errors``.
"""


class GatewayError(Exception):
    """Base class for gateway errors."""

    def __init__(self, message: str, code: str = "GATEWAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class AuthError(GatewayError):
    """Base class for session authentication failures."""


class MissingSessionError(AuthError):
    """No session cookie was sent with the request."""

    def __init__(self):
        super().__init__("Missing session", "MISSING_SESSION")


class InvalidSessionError(AuthError):
    """A session cookie was sent but does not resolve to a known user."""

    def __init__(self):
        super().__init__("Invalid session", "INVALID_SESSION")


class InvalidCredentialsError(GatewayError):
    """Login failed.

    The message is the same for unknown users and wrong tokens.
    """

    def __init__(self):
        super().__init__("Invalid username or token", "INVALID_CREDENTIALS")


class UploadError(GatewayError):
    """The multipart request did not carry a usable file part."""

    def __init__(self, reason: str):
        super().__init__(reason, "UPLOAD_ERROR")


class StorageError(GatewayError):
    """Any failure talking to the remote object store."""

    def __init__(self, reason: str):
        super().__init__(reason, "STORAGE_ERROR")


class StorageConfigError(StorageError):
    """Object store credentials or bucket are not configured."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing configuration: {', '.join(missing)}")
