"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from repoaudit.exceptions import DecodeError
from repoaudit.transport import API_PAGING
from repoaudit.types.repos import Repository

if TYPE_CHECKING:
    from repoaudit.transport import HTTPTransport


def _parse_repository(data: Any) -> Repository:
    """Parse a repository object from the api/v0 endpoints."""
    if not isinstance(data, dict):
        raise DecodeError(f"expected a repository object, got {type(data).__name__}")
    try:
        return Repository(
            id=str(data.get("id", "")),
            namespace=data["namespace"],
            name=data["name"],
            visibility=data["visibility"],
            namespace_type=data["namespaceType"],
        )
    except KeyError as e:
        raise DecodeError(f"repository is missing field {e}") from e


class RepositoriesClient:
    """Client for listing every repository in the registry."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repositories client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def list(self) -> list[Repository]:
        """
        List all repositories visible to the audit account.

        Returns:
            List of Repository objects across all pages

        Raises:
            FetchError: If any page cannot be fetched or decoded
        """
        return [
            _parse_repository(item)
            for page in self.transport.iter_pages(
                "/api/v0/repositories", "repositories", paging=API_PAGING
            )
            for item in page
        ]
