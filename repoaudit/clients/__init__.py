"""repoaudit resource clients."""

from repoaudit.clients.accounts import AccountsClient
from repoaudit.clients.repos import RepositoriesClient
from repoaudit.clients.teams import TeamsClient

__all__ = [
    "AccountsClient",
    "RepositoriesClient",
    "TeamsClient",
]
