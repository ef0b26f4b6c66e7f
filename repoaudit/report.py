"""
Audit report.

A read-only snapshot of the final audit state, keyed by account name, with
helpers for the questions a security review asks of it.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from repoaudit.types.access import AccessLevel

if TYPE_CHECKING:
    from repoaudit.registry import AuditState


@dataclass(frozen=True)
class UserAccess:
    """Final access of one user."""

    name: str
    id: str
    is_admin: bool
    repos: Mapping[str, AccessLevel] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isAdmin": self.is_admin,
            "repos": {name: self.repos[name].wire_name for name in sorted(self.repos)},
        }


@dataclass(frozen=True)
class OrgSummary:
    """An organization as seen by the audit."""

    name: str
    id: str
    teams: tuple[str, ...] = ()
    admins: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "teams": list(self.teams),
            "admins": list(self.admins),
        }


@dataclass(frozen=True)
class AuditReport:
    """Snapshot of every user's effective permission set."""

    users: Mapping[str, UserAccess]
    orgs: Mapping[str, OrgSummary]

    @classmethod
    def from_state(cls, state: "AuditState") -> "AuditReport":
        """Copy the registries so later mutation of the state is not visible."""
        users = {
            user.name: UserAccess(
                name=user.name,
                id=user.id,
                is_admin=user.is_admin,
                repos=MappingProxyType(dict(user.repos)),
            )
            for user in state.users
        }
        orgs = {
            org.name: OrgSummary(
                name=org.name,
                id=org.id,
                teams=tuple(sorted(org.teams)),
                admins=tuple(sorted(org.admins)),
            )
            for org in state.orgs
        }
        return cls(users=MappingProxyType(users), orgs=MappingProxyType(orgs))

    def access_for(self, user_name: str, repo_name: str) -> AccessLevel | None:
        """Level a user holds on a repository, or None for no access."""
        user = self.users.get(user_name)
        if user is None:
            return None
        return user.repos.get(repo_name)

    def users_with_access(
        self, repo_name: str, minimum: AccessLevel = AccessLevel.READ
    ) -> list[str]:
        """Names of users holding at least ``minimum`` on a repository."""
        return sorted(
            name
            for name, user in self.users.items()
            if repo_name in user.repos and user.repos[repo_name] >= minimum
        )

    def repos_for(
        self, user_name: str, minimum: AccessLevel = AccessLevel.READ
    ) -> list[str]:
        """Repositories on which a user holds at least ``minimum``."""
        user = self.users.get(user_name)
        if user is None:
            return []
        return sorted(name for name, level in user.repos.items() if level >= minimum)

    def summary(self) -> dict[str, int]:
        return {
            "users": len(self.users),
            "orgs": len(self.orgs),
            "admins": sum(1 for user in self.users.values() if user.is_admin),
            "grants": sum(len(user.repos) for user in self.users.values()),
        }

    def to_dict(self) -> dict[str, Any]:
        """Render as {"users": {...}, "orgs": {...}} keyed by name."""
        return {
            "users": {name: self.users[name].to_dict() for name in sorted(self.users)},
            "orgs": {name: self.orgs[name].to_dict() for name in sorted(self.orgs)},
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
