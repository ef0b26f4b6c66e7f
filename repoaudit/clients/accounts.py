"""Accounts resource client."""

from typing import TYPE_CHECKING, Any

from repoaudit.exceptions import DecodeError
from repoaudit.transport import ENZI_PAGING
from repoaudit.types.accounts import Account, OrgMember

if TYPE_CHECKING:
    from repoaudit.transport import HTTPTransport


def _parse_account(data: Any) -> Account:
    """Parse an enzi account object."""
    if not isinstance(data, dict):
        raise DecodeError(f"expected an account object, got {type(data).__name__}")
    try:
        return Account(
            id=str(data.get("id", "")),
            name=data["name"],
            is_org=bool(data.get("isOrg", False)),
            is_admin=bool(data.get("isAdmin", False)),
        )
    except KeyError as e:
        raise DecodeError(f"account is missing field {e}") from e


def _parse_member(data: Any) -> OrgMember:
    """Parse a membership entry: {"member": {...}, "isAdmin": bool}."""
    if not isinstance(data, dict) or "member" not in data:
        raise DecodeError("membership entry is missing 'member'")
    return OrgMember(
        account=_parse_account(data["member"]),
        is_admin=bool(data.get("isAdmin", False)),
    )


class AccountsClient:
    """Client for account listings and organization membership."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the accounts client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def list_org_admins(self, org_name: str) -> list[Account]:
        """
        List the administrators of an organization.

        Args:
            org_name: The organization name

        Returns:
            Accounts of the organization's admin members

        Raises:
            FetchError: If any page cannot be fetched or decoded
        """
        members = [
            _parse_member(item)
            for page in self.transport.iter_pages(
                f"/enzi/v0/accounts/{org_name}/members",
                "members",
                params={"filter": "admins"},
                paging=ENZI_PAGING,
            )
            for item in page
        ]
        # the filter is applied server side; isAdmin guards older servers
        return [m.account for m in members if m.is_admin]

    def list(self) -> list[Account]:
        """
        List every user and organization account.

        Returns:
            List of Account objects across all pages

        Raises:
            FetchError: If any page cannot be fetched or decoded
        """
        return [
            _parse_account(item)
            for page in self.transport.iter_pages(
                "/enzi/v0/accounts", "accounts", paging=ENZI_PAGING
            )
            for item in page
        ]
