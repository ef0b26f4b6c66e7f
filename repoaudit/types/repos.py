"""Repository-related data models."""

from dataclasses import dataclass

from repoaudit.types.access import AccessLevel

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"

NAMESPACE_TYPE_USER = "user"
NAMESPACE_TYPE_ORG = "organization"


@dataclass(frozen=True)
class Repository:
    """Repository information as listed by the registry."""

    id: str
    namespace: str
    name: str
    visibility: str  # "public" or "private"
    namespace_type: str  # "user" or "organization"

    @property
    def full_name(self) -> str:
        """Globally unique "namespace/name" identity."""
        return f"{self.namespace}/{self.name}"

    @property
    def is_public(self) -> bool:
        return self.visibility == VISIBILITY_PUBLIC

    @property
    def owned_by_org(self) -> bool:
        return self.namespace_type == NAMESPACE_TYPE_ORG


@dataclass(frozen=True)
class TeamRepositoryAccess:
    """A repository a team can access, with the level granted to the team."""

    repository: Repository
    access_level: AccessLevel
