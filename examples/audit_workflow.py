#!/usr/bin/env python3
"""
repoaudit - Complete Audit Workflow Example

This example runs a full permission audit against a registry and answers a
few review questions from the report:
1. Who holds admin on each organization repository
2. Which repositories a given account can write to
3. Overall counts

Configuration is read from REPOAUDIT_HOST, REPOAUDIT_USER and
REPOAUDIT_PASSWORD. Run with: python examples/audit_workflow.py [account]
"""

import sys

from repoaudit import AccessLevel, Auditor, RegistryClient
from repoaudit.exceptions import RepoAuditError
from repoaudit.logging import configure_logging


def main() -> int:
    """Run the audit and print a short review."""
    print("=== repoaudit Example ===\n")
    configure_logging()

    try:
        with RegistryClient.from_env() as client:
            print(f"1. Auditing {client.base_url} as {client.username}...")
            report = Auditor(client).run()
    except RepoAuditError as e:
        print(f"   Audit failed: [{e.code}] {e.message}")
        return 1

    print("\n2. Organization repository admins:")
    for org in report.orgs.values():
        print(f"   {org.name}: org admins {', '.join(org.admins) or '-'}")
    repo_names = sorted({name for user in report.users.values() for name in user.repos})
    for repo_name in repo_names:
        admins = report.users_with_access(repo_name, AccessLevel.ADMIN)
        print(f"   {repo_name}: {', '.join(admins) or '-'}")

    if len(sys.argv) > 1:
        account = sys.argv[1]
        print(f"\n3. Repositories {account} can write to:")
        for repo_name in report.repos_for(account, AccessLevel.WRITE):
            print(f"   {repo_name} ({report.access_for(account, repo_name).wire_name})")

    print("\n4. Summary:")
    for key, value in report.summary().items():
        print(f"   {key}: {value}")

    print("\n=== Done ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
