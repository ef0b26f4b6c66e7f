"""Shared fixtures for the repoaudit test suite."""

from repoaudit.testing.fixtures import (  # noqa: F401
    mock_source,
    populated_source,
    sample_org_repository,
    sample_repository,
)
