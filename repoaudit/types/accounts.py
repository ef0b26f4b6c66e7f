"""Account, team and membership data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """A user or organization account."""

    id: str
    name: str
    is_org: bool = False
    is_admin: bool = False


@dataclass(frozen=True)
class Team:
    """A team scoped to one organization."""

    id: str
    name: str
    org_name: str


@dataclass(frozen=True)
class OrgMember:
    """Membership of an account in an organization."""

    account: Account
    is_admin: bool
