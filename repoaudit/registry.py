"""
In-memory audit state.

Holds one mutable record per user and organization seen during a run. Every
stage reaches records through ``upsert`` so that an account first seen by one
stage keeps its accumulated permissions when a later stage sees it again.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from repoaudit.types.access import AccessLevel, merge_access


@dataclass
class UserRecord:
    """A user account and its effective permission set."""

    name: str
    id: str = ""
    is_admin: bool = False
    # repository full name -> best level granted so far
    repos: dict[str, AccessLevel] = field(default_factory=dict)

    def grant(self, repo_name: str, level: AccessLevel) -> AccessLevel:
        """
        Offer a level on a repository and keep the higher of old and new.

        Args:
            repo_name: Repository full name ("namespace/name")
            level: Level being offered

        Returns:
            The level stored after the merge
        """
        merged = merge_access(self.repos.get(repo_name), level)
        self.repos[repo_name] = merged
        return merged

    def access_for(self, repo_name: str) -> AccessLevel | None:
        return self.repos.get(repo_name)


@dataclass
class TeamRecord:
    """A team visited while walking an organization."""

    name: str
    id: str = ""
    repos: dict[str, AccessLevel] = field(default_factory=dict)
    members: set[str] = field(default_factory=set)


@dataclass
class OrgRecord:
    """An organization, the repositories it owns and its teams."""

    name: str
    id: str = ""
    repos: set[str] = field(default_factory=set)
    teams: dict[str, TeamRecord] = field(default_factory=dict)
    admins: set[str] = field(default_factory=set)


R = TypeVar("R", UserRecord, OrgRecord)


class _Registry(Generic[R]):
    """Name-keyed collection of records with create-if-absent access."""

    record_type: type[R]

    def __init__(self) -> None:
        self._records: dict[str, R] = {}

    def upsert(self, name: str) -> R:
        """Return the record for ``name``, creating an empty one if absent."""
        record = self._records.get(name)
        if record is None:
            record = self.record_type(name=name)
            self._records[name] = record
        return record

    def get(self, name: str) -> R | None:
        return self._records.get(name)

    def names(self) -> list[str]:
        """Names in discovery order."""
        return list(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._records.values()))


class UserRegistry(_Registry[UserRecord]):
    record_type = UserRecord


class OrgRegistry(_Registry[OrgRecord]):
    record_type = OrgRecord


@dataclass
class AuditState:
    """Everything a run accumulates, shared by all stages."""

    users: UserRegistry = field(default_factory=UserRegistry)
    orgs: OrgRegistry = field(default_factory=OrgRegistry)
    # full names of public repositories, in discovery order
    public_repos: dict[str, None] = field(default_factory=dict)

    def add_public_repo(self, repo_name: str) -> None:
        self.public_repos.setdefault(repo_name, None)
