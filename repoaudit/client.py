"""
repoaudit registry client.

Provides the HTTP-backed data source the auditor reads from.
"""

from typing import Any

from repoaudit.clients import AccountsClient, RepositoriesClient, TeamsClient
from repoaudit.config import AuditConfig
from repoaudit.source import DataSource
from repoaudit.transport import HTTPTransport, RetryConfig
from repoaudit.types.accounts import Account, Team
from repoaudit.types.repos import Repository, TeamRepositoryAccess


class RegistryClient(DataSource):
    """
    Read-only client for a registry's repository, account and team APIs.

    Aggregates the resource clients over one transport and exposes them
    through the DataSource interface.

    Example:
        ```python
        from repoaudit import Auditor, RegistryClient

        with RegistryClient.from_env() as client:
            report = Auditor(client).run()
        print(report.to_json())
        ```
    """

    DEFAULT_TIMEOUT = AuditConfig.DEFAULT_TIMEOUT

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        page_size: int = AuditConfig.DEFAULT_PAGE_SIZE,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the registry client.

        Args:
            base_url: Registry URL (e.g., "https://dtr.example.com")
            username: Account used to read the registry
            password: Password or access token for that account
            timeout: Request timeout in seconds (default: 30.0)
            verify: Whether to verify the server's TLS certificate
            page_size: Number of items requested per page
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.username = username

        self._transport = HTTPTransport(
            base_url=base_url,
            username=username,
            password=password,
            timeout=timeout,
            verify=verify,
            page_size=page_size,
            retry_config=retry_config,
        )

        self.repositories = RepositoriesClient(self._transport)
        self.accounts = AccountsClient(self._transport)
        self.teams = TeamsClient(self._transport)

    @classmethod
    def from_config(cls, config: AuditConfig) -> "RegistryClient":
        """Create a client from an AuditConfig."""
        return cls(
            base_url=config.host,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
            verify=config.verify_tls,
            page_size=config.page_size,
            retry_config=config.retry,
        )

    @classmethod
    def from_env(cls) -> "RegistryClient":
        """
        Create a client from ``REPOAUDIT_*`` environment variables.

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls.from_config(AuditConfig.from_env())

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def list_repositories(self) -> list[Repository]:
        return self.repositories.list()

    def list_accounts(self) -> list[Account]:
        return self.accounts.list()

    def list_teams(self, org_name: str) -> list[Team]:
        return self.teams.list(org_name)

    def list_team_repositories(
        self, org_name: str, team_name: str
    ) -> list[TeamRepositoryAccess]:
        return self.teams.list_repositories(org_name, team_name)

    def list_team_members(self, org_name: str, team_name: str) -> list[Account]:
        return self.teams.list_members(org_name, team_name)

    def list_org_admins(self, org_name: str) -> list[Account]:
        return self.accounts.list_org_admins(org_name)

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "RegistryClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
