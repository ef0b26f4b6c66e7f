"""
Data source interface consumed by the auditor.

Implementations are responsible for paging, authentication and retrying;
any exception they raise is treated as fatal to the run.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from repoaudit.types.accounts import Account, Team
from repoaudit.types.repos import Repository, TeamRepositoryAccess


class DataSource(ABC):
    """Abstract base class for registry fact sources."""

    @abstractmethod
    def list_repositories(self) -> Iterable[Repository]:
        """Return every repository in the registry."""
        pass

    @abstractmethod
    def list_accounts(self) -> Iterable[Account]:
        """Return every user and organization account."""
        pass

    @abstractmethod
    def list_teams(self, org_name: str) -> Iterable[Team]:
        """Return the teams of an organization."""
        pass

    @abstractmethod
    def list_team_repositories(
        self, org_name: str, team_name: str
    ) -> Iterable[TeamRepositoryAccess]:
        """Return the repositories a team can access, with the team's level."""
        pass

    @abstractmethod
    def list_team_members(self, org_name: str, team_name: str) -> Iterable[Account]:
        """Return the member accounts of a team."""
        pass

    @abstractmethod
    def list_org_admins(self, org_name: str) -> Iterable[Account]:
        """Return the administrator accounts of an organization."""
        pass
