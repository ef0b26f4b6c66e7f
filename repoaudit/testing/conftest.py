"""
Pytest plugin for repoaudit testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["repoaudit.testing.conftest"]
"""

from repoaudit.testing.fixtures import (
    mock_source,
    populated_source,
    sample_org_repository,
    sample_repository,
)

__all__ = [
    "mock_source",
    "populated_source",
    "sample_repository",
    "sample_org_repository",
]
