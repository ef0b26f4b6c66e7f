"""Teams resource client."""

from typing import TYPE_CHECKING, Any

from repoaudit.clients.accounts import _parse_member
from repoaudit.clients.repos import _parse_repository
from repoaudit.exceptions import DecodeError
from repoaudit.transport import API_PAGING, ENZI_PAGING
from repoaudit.types.access import AccessLevel
from repoaudit.types.accounts import Account, Team
from repoaudit.types.repos import TeamRepositoryAccess

if TYPE_CHECKING:
    from repoaudit.transport import HTTPTransport


def _parse_team(data: Any, org_name: str) -> Team:
    if not isinstance(data, dict) or "name" not in data:
        raise DecodeError("team entry is missing 'name'")
    return Team(id=str(data.get("id", "")), name=data["name"], org_name=org_name)


def _parse_team_repository(data: Any) -> TeamRepositoryAccess:
    """Parse {"accessLevel": "...", "repository": {...}}.

    The level is a top-level field, not part of the repository object.
    """
    if not isinstance(data, dict):
        raise DecodeError("expected a repository access object")
    try:
        level = data["accessLevel"]
        repository = data["repository"]
    except KeyError as e:
        raise DecodeError(f"repository access entry is missing field {e}") from e
    return TeamRepositoryAccess(
        repository=_parse_repository(repository),
        access_level=AccessLevel.parse(level),
    )


class TeamsClient:
    """Client for organization teams, their grants and their members."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the teams client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def list_repositories(
        self, org_name: str, team_name: str
    ) -> list[TeamRepositoryAccess]:
        """
        List the repositories a team can access and the level granted.

        Args:
            org_name: The organization name
            team_name: The team name

        Returns:
            List of TeamRepositoryAccess objects

        Raises:
            FetchError: If any page cannot be fetched or decoded
            InvalidAccessLevelError: If a grant carries an unknown level
        """
        return [
            _parse_team_repository(item)
            for page in self.transport.iter_pages(
                f"/api/v0/accounts/{org_name}/teams/{team_name}/repositoryAccess",
                "repositoryAccessList",
                paging=API_PAGING,
            )
            for item in page
        ]

    def list_members(self, org_name: str, team_name: str) -> list[Account]:
        """
        List the member accounts of a team.

        Args:
            org_name: The organization name
            team_name: The team name

        Returns:
            List of member Account objects

        Raises:
            FetchError: If any page cannot be fetched or decoded
        """
        return [
            _parse_member(item).account
            for page in self.transport.iter_pages(
                f"/enzi/v0/accounts/{org_name}/teams/{team_name}/members",
                "members",
                paging=ENZI_PAGING,
            )
            for item in page
        ]

    def list(self, org_name: str) -> list[Team]:
        """
        List the teams of an organization.

        Args:
            org_name: The organization name

        Returns:
            List of Team objects

        Raises:
            FetchError: If any page cannot be fetched or decoded
        """
        return [
            _parse_team(item, org_name)
            for page in self.transport.iter_pages(
                f"/enzi/v0/accounts/{org_name}/teams", "teams", paging=ENZI_PAGING
            )
            for item in page
        ]
