"""repoaudit exception classes."""



class RepoAuditError(Exception):
    """Base exception for all repoaudit errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(RepoAuditError):
    """Raised when audit configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class FetchError(RepoAuditError):
    """Base class for failures surfaced by a data source."""

    pass


class ConnectionFailedError(FetchError):
    """Raised when the registry could not be reached after all attempts."""

    def __init__(self, message: str) -> None:
        super().__init__("CONNECTION_ERROR", message)


class UnexpectedStatusError(FetchError):
    """Raised when the registry answers with a non-2xx status."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        url: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code
        self.url = url


class AuthenticationError(UnexpectedStatusError):
    """Raised when the registry rejects the credentials (401)."""

    pass


class AuthorizationError(UnexpectedStatusError):
    """Raised when the audit account lacks permission (403)."""

    pass


class NotFoundError(UnexpectedStatusError):
    """Raised when a resource is not found (404)."""

    pass


class ServerError(UnexpectedStatusError):
    """Raised on server errors (5xx)."""

    pass


class DecodeError(FetchError):
    """Raised when a response body does not match the expected envelope."""

    def __init__(self, message: str) -> None:
        super().__init__("DECODE_ERROR", message)


class InvalidAccessLevelError(RepoAuditError):
    """Raised when an access level cannot be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__("INVALID_ACCESS_LEVEL", f"unknown access level: {value!r}")
        self.value = value


class StageError(RepoAuditError):
    """Raised when an audit stage fails; the run is aborted."""

    def __init__(
        self, stage: str, message: str, entity: str | None = None
    ) -> None:
        self.stage = stage
        self.entity = entity
        where = f"stage '{stage}'"
        if entity:
            where += f" ({entity})"
        super().__init__("STAGE_FAILED", f"{where}: {message}")
