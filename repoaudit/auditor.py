"""
Repository access auditor.

Computes, for every user account in the registry, the effective access level
held on every repository, by folding three kinds of facts into one
``AuditState``:

User accounts
=============

A user owns every repository in their namespace and holds admin access to it.
Public repositories are readable by every user.

Organization accounts
=====================

An organization grants no access by owning a repository. Access comes from
organization admin membership, which grants admin on every repository the
organization owns, and from teams, which grant their members a fixed level on
each repository the team can access.

Whenever two grants target the same (user, repository) pair, the higher level
wins; nothing is ever downgraded. Stages run strictly in order and any failure
aborts the run without a report.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from repoaudit.exceptions import StageError
from repoaudit.logging import get_logger, log_stage
from repoaudit.registry import AuditState, TeamRecord
from repoaudit.report import AuditReport
from repoaudit.source import DataSource
from repoaudit.types.access import AccessLevel, merge_access

logger = get_logger("audit")

T = TypeVar("T")

DISCOVER_REPOSITORIES = "discover_repositories"
WALK_ORGANIZATIONS = "walk_organizations"
BACKFILL_ACCOUNTS = "backfill_accounts"
BROADCAST_PUBLIC_REPOSITORIES = "broadcast_public_repositories"


@dataclass(frozen=True)
class Stage:
    """A named step of the audit pipeline."""

    name: str
    run: Callable[[AuditState, DataSource], None]


def _fetch(
    stage: str, entity: str, what: str, fetch: Callable[[], Iterable[T]]
) -> list[T]:
    """Drain a data source call, naming the entity being processed on failure."""
    try:
        return list(fetch())
    except StageError:
        raise
    except Exception as e:
        raise StageError(stage, f"error fetching {what}: {e}", entity=entity) from e


def discover_repositories(state: AuditState, source: DataSource) -> None:
    """
    Seed users and organizations from repository ownership.

    User-owned repositories grant their owner admin. Organization-owned
    repositories are only recorded against the organization; public ones are
    remembered for the final broadcast.
    """
    repos = _fetch(
        DISCOVER_REPOSITORIES, "repositories", "repositories", source.list_repositories
    )

    for repo in repos:
        if repo.owned_by_org:
            org = state.orgs.upsert(repo.namespace)
            org.repos.add(repo.full_name)
        else:
            user = state.users.upsert(repo.namespace)
            user.grant(repo.full_name, AccessLevel.ADMIN)

        if repo.is_public:
            state.add_public_repo(repo.full_name)

    log_stage(
        DISCOVER_REPOSITORIES,
        "finished",
        repositories=len(repos),
        users=len(state.users),
        orgs=len(state.orgs),
        public=len(state.public_repos),
    )


def _audit_team(
    state: AuditState, source: DataSource, org_name: str, team_name: str, team_id: str
) -> TeamRecord:
    entity = f"{org_name}/{team_name}"
    grants = _fetch(
        WALK_ORGANIZATIONS,
        entity,
        "repositories for team",
        lambda: source.list_team_repositories(org_name, team_name),
    )
    members = _fetch(
        WALK_ORGANIZATIONS,
        entity,
        "members for team",
        lambda: source.list_team_members(org_name, team_name),
    )

    team = TeamRecord(name=team_name, id=team_id)
    for grant in grants:
        name = grant.repository.full_name
        team.repos[name] = merge_access(team.repos.get(name), grant.access_level)

    for member in members:
        # members may own nothing and so be unseen until now
        user = state.users.upsert(member.name)
        team.members.add(member.name)
        for repo_name, level in team.repos.items():
            user.grant(repo_name, level)

    return team


def walk_organizations(state: AuditState, source: DataSource) -> None:
    """
    Fold team grants and organization admin rights into user records.

    Only organizations known when the stage starts are walked.
    """
    teams_seen = 0
    for org_name in state.orgs.names():
        org = state.orgs.upsert(org_name)

        teams = _fetch(
            WALK_ORGANIZATIONS,
            org_name,
            "teams for org",
            lambda: source.list_teams(org_name),
        )
        for team in teams:
            org.teams[team.name] = _audit_team(state, source, org_name, team.name, team.id)
        teams_seen += len(teams)

        admins = _fetch(
            WALK_ORGANIZATIONS,
            org_name,
            "admins for org",
            lambda: source.list_org_admins(org_name),
        )
        for admin in admins:
            org.admins.add(admin.name)
            user = state.users.upsert(admin.name)
            for repo_name in org.repos:
                user.grant(repo_name, AccessLevel.ADMIN)

    log_stage(
        WALK_ORGANIZATIONS,
        "finished",
        orgs=len(state.orgs),
        teams=teams_seen,
        users=len(state.users),
    )


def backfill_accounts(state: AuditState, source: DataSource) -> None:
    """
    Add accounts with no repository relationship and refresh account fields.

    The account listing is the only authoritative source of identifiers and
    of the global admin flag. Permission sets are never touched here.
    """
    accounts = _fetch(
        BACKFILL_ACCOUNTS, "accounts", "accounts", source.list_accounts
    )

    new_users = new_orgs = 0
    for account in accounts:
        if account.is_org:
            if account.name not in state.orgs:
                new_orgs += 1
            org = state.orgs.upsert(account.name)
            org.id = account.id
        else:
            if account.name not in state.users:
                new_users += 1
                logger.debug("found user with no repositories: %s", account.name)
            user = state.users.upsert(account.name)
            user.id = account.id
            user.is_admin = account.is_admin

    log_stage(
        BACKFILL_ACCOUNTS,
        "finished",
        accounts=len(accounts),
        new_users=new_users,
        new_orgs=new_orgs,
    )


def broadcast_public_repositories(state: AuditState, source: DataSource) -> None:
    """Grant every known user read access to every public repository."""
    for user in state.users:
        for repo_name in state.public_repos:
            user.grant(repo_name, AccessLevel.READ)

    log_stage(
        BROADCAST_PUBLIC_REPOSITORIES,
        "finished",
        users=len(state.users),
        public=len(state.public_repos),
    )


STAGES: tuple[Stage, ...] = (
    # repositories reveal every account that owns at least one
    Stage(DISCOVER_REPOSITORIES, discover_repositories),
    Stage(WALK_ORGANIZATIONS, walk_organizations),
    # accounts with access to nothing only show up in the full listing
    Stage(BACKFILL_ACCOUNTS, backfill_accounts),
    Stage(BROADCAST_PUBLIC_REPOSITORIES, broadcast_public_repositories),
)


class Auditor:
    """
    Runs the audit pipeline against a data source.

    Example:
        ```python
        from repoaudit import Auditor, RegistryClient

        with RegistryClient.from_env() as client:
            report = Auditor(client).run()
        ```
    """

    def __init__(
        self,
        source: DataSource,
        state: AuditState | None = None,
        stages: Sequence[Stage] = STAGES,
    ) -> None:
        """
        Initialize the auditor.

        Args:
            source: Where registry facts are read from
            state: State to fold into (default: a fresh, empty state)
            stages: Ordered pipeline (default: the four standard stages)
        """
        self.source = source
        self.state = state if state is not None else AuditState()
        self.stages = tuple(stages)

    def run(self) -> AuditReport:
        """
        Run every stage in order and build the report.

        Returns:
            Snapshot of the final state

        Raises:
            StageError: On the first failing stage; later stages do not run
        """
        for stage in self.stages:
            self._run(stage)
        return AuditReport.from_state(self.state)

    def run_stage(self, name: str) -> None:
        """
        Run a single stage by name.

        Raises:
            KeyError: If no stage has that name
            StageError: If the stage fails
        """
        for stage in self.stages:
            if stage.name == name:
                self._run(stage)
                return
        raise KeyError(name)

    def _run(self, stage: Stage) -> None:
        log_stage(stage.name, "started")
        try:
            stage.run(self.state, self.source)
        except StageError:
            raise
        except Exception as e:
            raise StageError(stage.name, str(e)) from e
