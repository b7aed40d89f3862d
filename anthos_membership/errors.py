import enum
from typing import Optional


class ErrorKind(enum.Enum):
    NOT_FOUND = "NotFound"
    TRANSIENT = "Transient"
    FATAL = "Fatal"


_TRANSIENT_STATUSES = (408, 429)


def classify_status(status: Optional[int]) -> ErrorKind:
    """Map an HTTP status from the API server to an error kind.

    A missing status means the request never got an answer (connection
    refused, TLS failure, timeout) and is treated as transient.
    """
    if status is None:
        return ErrorKind.TRANSIENT
    if status == 404:
        return ErrorKind.NOT_FOUND
    if status in _TRANSIENT_STATUSES or status >= 500:
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL


class MembershipError(Exception):
    pass


class ClientInitError(MembershipError):
    pass


class ConfigurationError(MembershipError):
    pass


class ManifestError(MembershipError):
    def __init__(self, message: str, manifest: Optional[str] = None):
        self.manifest = manifest
        if manifest:
            message = f"{manifest} manifest: {message}"
        super().__init__(message)


class ApiRequestError(MembershipError):
    def __init__(
            self,
            operation: str,
            path: str,
            status: Optional[int] = None,
            reason: Optional[str] = None,
    ):
        self.operation = operation
        self.path = path
        self.status = status
        self.reason = reason
        self.kind = classify_status(status)
        detail = f"({status}) {reason}" if status is not None else str(reason)
        super().__init__(f"{operation} {path}: {detail}")

    @property
    def not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND


class InstallError(MembershipError):
    def __init__(self, artifact: str, cause: Exception):
        self.artifact = artifact
        self.cause = cause
        super().__init__(f"installing {artifact}: {cause}")
