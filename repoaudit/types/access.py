"""Repository access levels and the merge rule."""

from enum import IntEnum

from repoaudit.exceptions import InvalidAccessLevelError


class AccessLevel(IntEnum):
    """Ordered permission grade on a repository (READ < WRITE < ADMIN)."""

    READ = 1
    WRITE = 2
    ADMIN = 3

    @property
    def wire_name(self) -> str:
        """Name used by the registry API and in reports."""
        return _WIRE_NAMES[self]

    @classmethod
    def parse(cls, value: "str | AccessLevel") -> "AccessLevel":
        """
        Parse a wire name such as "read-write" into an AccessLevel.

        Raises:
            InvalidAccessLevelError: If the value is not a known level
        """
        if isinstance(value, AccessLevel):
            return value
        if isinstance(value, str):
            level = _BY_WIRE_NAME.get(value.strip().lower())
            if level is not None:
                return level
        raise InvalidAccessLevelError(value)


_WIRE_NAMES = {
    AccessLevel.READ: "read-only",
    AccessLevel.WRITE: "read-write",
    AccessLevel.ADMIN: "admin",
}
_BY_WIRE_NAME = {name: level for level, name in _WIRE_NAMES.items()}


def merge_access(
    existing: AccessLevel | None, incoming: AccessLevel
) -> AccessLevel:
    """Return the higher of two grants; a missing grant loses to any level."""
    if existing is not None and existing >= incoming:
        return existing
    return incoming
