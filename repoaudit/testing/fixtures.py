"""
Pytest fixtures for repoaudit testing.

Provides factories and a populated mock data source.
"""

from collections.abc import Generator
from typing import Any

import pytest

from repoaudit.testing.mock import MockDataSource
from repoaudit.types.access import AccessLevel
from repoaudit.types.accounts import Account
from repoaudit.types.repos import (
    NAMESPACE_TYPE_ORG,
    NAMESPACE_TYPE_USER,
    VISIBILITY_PRIVATE,
    Repository,
)


def create_mock_repository(
    namespace: str = "test-user",
    name: str = "test-repo",
    **kwargs: Any,
) -> Repository:
    """
    Create a Repository with customizable fields.

    Args:
        namespace: Owning account name
        name: Repository name within the namespace
        **kwargs: Additional fields to override

    Returns:
        Repository object
    """
    defaults = {
        "id": f"{namespace}-{name}-id",
        "visibility": VISIBILITY_PRIVATE,
        "namespace_type": NAMESPACE_TYPE_USER,
    }
    defaults.update(kwargs)
    return Repository(namespace=namespace, name=name, **defaults)


def create_mock_org_repository(
    org_name: str = "test-org", name: str = "test-repo", **kwargs: Any
) -> Repository:
    """Create a Repository owned by an organization."""
    return create_mock_repository(
        org_name, name, namespace_type=NAMESPACE_TYPE_ORG, **kwargs
    )


def create_mock_account(
    name: str = "test-user",
    **kwargs: Any,
) -> Account:
    """
    Create an Account with customizable fields.

    Args:
        name: Account name
        **kwargs: Additional fields to override

    Returns:
        Account object
    """
    defaults: dict[str, Any] = {
        "id": f"{name}-id",
        "is_org": False,
        "is_admin": False,
    }
    defaults.update(kwargs)
    return Account(name=name, **defaults)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_source() -> Generator[MockDataSource, None, None]:
    """
    Provide an empty MockDataSource.

    Example:
        ```python
        def test_owner_is_admin(mock_source):
            mock_source.add_repository(create_mock_repository("alice", "proj"))
            report = Auditor(mock_source).run()
            assert report.access_for("alice", "alice/proj") is AccessLevel.ADMIN
        ```
    """
    source = MockDataSource()
    yield source
    source.reset()


@pytest.fixture
def sample_repository() -> Repository:
    """Provide a private user-owned repository."""
    return create_mock_repository("alice", "proj")


@pytest.fixture
def sample_org_repository() -> Repository:
    """Provide a private organization-owned repository."""
    return create_mock_org_repository("acme", "infra")


@pytest.fixture
def populated_source() -> MockDataSource:
    """
    Provide a MockDataSource with a small organization.

    - alice owns alice/proj (private) and alice/tool (public)
    - acme owns acme/infra (private)
    - acme/platform grants WRITE on acme/infra to bob and carol
    - acme/admins grants ADMIN on acme/infra to carol
    - dave is a global admin with no repositories
    - erin is an admin of acme
    """
    source = MockDataSource()
    source.add_repository(create_mock_repository("alice", "proj"))
    source.add_repository(create_mock_repository("alice", "tool", visibility="public"))
    infra = source.add_repository(create_mock_org_repository("acme", "infra"))

    source.add_team("acme", "platform", grants=[(infra, AccessLevel.WRITE)], members=["bob", "carol"])
    source.add_team("acme", "admins", grants=[(infra, AccessLevel.ADMIN)], members=["carol"])
    source.add_org_admin("acme", "erin")

    for name in ("alice", "bob", "carol", "erin"):
        source.add_account(name)
    source.add_account("dave", is_admin=True)
    source.add_account("acme", is_org=True)
    return source


__all__ = [
    "mock_source",
    "sample_repository",
    "sample_org_repository",
    "populated_source",
    # Helper functions
    "create_mock_repository",
    "create_mock_org_repository",
    "create_mock_account",
]
