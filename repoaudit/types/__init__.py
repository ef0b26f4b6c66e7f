"""repoaudit type definitions.

This module exports the data model types read from the registry.
"""

from repoaudit.types.access import AccessLevel, merge_access
from repoaudit.types.accounts import Account, OrgMember, Team
from repoaudit.types.repos import (
    NAMESPACE_TYPE_ORG,
    NAMESPACE_TYPE_USER,
    VISIBILITY_PRIVATE,
    VISIBILITY_PUBLIC,
    Repository,
    TeamRepositoryAccess,
)

__all__ = [
    # Access levels
    "AccessLevel",
    "merge_access",
    # Account types
    "Account",
    "OrgMember",
    "Team",
    # Repository types
    "Repository",
    "TeamRepositoryAccess",
    "VISIBILITY_PUBLIC",
    "VISIBILITY_PRIVATE",
    "NAMESPACE_TYPE_USER",
    "NAMESPACE_TYPE_ORG",
]
