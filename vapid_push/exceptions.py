"""
VAPID push exceptions

Errors raised while validating, signing and dispatching a Web Push request.
Every error is terminal for the current call; retry policy belongs to the caller.
"""

from collections.abc import Mapping


class VapidPushError(Exception):
    """Base class for all vapid_push errors"""

    pass


class MissingEndpoint(VapidPushError):
    """The subscription carries no usable endpoint URL"""

    def __init__(self, message: str = "No endpoint information provided"):
        super().__init__(message)


class InvalidClaim(VapidPushError):
    """The claim cannot be turned into a valid VAPID claim"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class KeyMaterialError(VapidPushError):
    """Base class for private key reference problems"""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class KeyNotFound(KeyMaterialError):
    """The referenced private key does not exist"""

    def __init__(self, path: str):
        super().__init__(f"{path} does not exist", path=path)


class InvalidKeyFormat(KeyMaterialError):
    """The referenced file is not an EC P-256 private key"""

    def __init__(self, path: str, reason: str | None = None):
        message = f"{path} is not a valid EC P-256 private key pem file"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path=path)


class SigningFailed(VapidPushError):
    """The signing backend could not produce a signature"""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TransportError(VapidPushError):
    """The push request never got an HTTP response (DNS, connect, timeout)"""

    def __init__(self, message: str, url: str | None = None, cause: Exception | None = None):
        self.url = url
        self.cause = cause
        super().__init__(message)


class PushRejected(VapidPushError):
    """The push service answered with a status above 202"""

    def __init__(
        self,
        status: int,
        body: str = "",
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ):
        self.status = status
        self.body = body
        self.content = content if content is not None else body.encode("utf-8")
        self.headers = dict(headers or {})
        super().__init__(f"Webpush failed with status {status}")

    @property
    def gone(self) -> bool:
        """Whether the subscription is invalid and should not be used again."""
        return self.status in (404, 410)

    @property
    def recoverable(self) -> bool:
        """Whether sending again later may succeed."""
        return self.status == 429 or self.status >= 500

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "body": self.body,
            "headers": self.headers,
        }
