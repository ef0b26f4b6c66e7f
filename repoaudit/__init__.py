"""repoaudit - effective repository access audit for registries."""

from repoaudit.auditor import STAGES, Auditor, Stage
from repoaudit.client import RegistryClient
from repoaudit.config import AuditConfig
from repoaudit.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConnectionFailedError,
    DecodeError,
    FetchError,
    InvalidAccessLevelError,
    NotFoundError,
    RepoAuditError,
    ServerError,
    StageError,
    UnexpectedStatusError,
)
from repoaudit.logging import configure_logging, get_logger
from repoaudit.registry import AuditState, OrgRecord, TeamRecord, UserRecord
from repoaudit.report import AuditReport
from repoaudit.source import DataSource
from repoaudit.transport import HTTPTransport, RetryConfig
from repoaudit.types.access import AccessLevel, merge_access

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Auditor
    "Auditor",
    "Stage",
    "STAGES",
    "AuditState",
    "UserRecord",
    "OrgRecord",
    "TeamRecord",
    "AuditReport",
    # Access levels
    "AccessLevel",
    "merge_access",
    # Data source
    "DataSource",
    "RegistryClient",
    "AuditConfig",
    # Exceptions
    "RepoAuditError",
    "ConfigurationError",
    "FetchError",
    "ConnectionFailedError",
    "UnexpectedStatusError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ServerError",
    "DecodeError",
    "InvalidAccessLevelError",
    "StageError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
