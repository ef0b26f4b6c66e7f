"""repoaudit testing utilities.

Provides a mock data source and fixtures for testing code built on the auditor.
"""

from repoaudit.testing.fixtures import (
    create_mock_account,
    create_mock_org_repository,
    create_mock_repository,
)
from repoaudit.testing.mock import MockCall, MockDataSource

__all__ = [
    # Mock data source
    "MockDataSource",
    "MockCall",
    # Helper functions
    "create_mock_repository",
    "create_mock_org_repository",
    "create_mock_account",
]
