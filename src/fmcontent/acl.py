"""Access control: rule-based access levels for disk paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, Final, Iterable, Mapping, Protocol

logger = logging.getLogger(__name__)

NO_ACCESS: Final = 0
READ: Final = 1
READ_WRITE: Final = 2

ACCESS_LEVELS: Final[frozenset[int]] = frozenset({NO_ACCESS, READ, READ_WRITE})

# Fallback access level when no rule matches.
STRATEGIES: Final[dict[str, int]] = {
    "blacklist": READ_WRITE,
    "whitelist": NO_ACCESS,
}


class AccessControl(Protocol):
    """Protocol for access-level lookups.

    ``0`` means no access; any other value grants some access.
    """

    def get_access_level(self, disk: str, path: str) -> int: ...


@dataclass(frozen=True, slots=True)
class AclRule:
    """A single access rule.

    Attributes:
        disk: Disk name the rule applies to.
        path: Shell-style pattern matched against the entry path.
            ``*`` also matches ``/``.
        access: Access level granted on match.
    """

    disk: str
    path: str
    access: int

    def matches(self, disk: str, path: str) -> bool:
        return self.disk == disk and fnmatchcase(path, self.path)


class RuleACL:
    """Resolve access levels from an ordered list of rules.

    The first matching rule wins. Without a match the strategy decides:
    ``blacklist`` allows everything not listed, ``whitelist`` denies it.
    """

    def __init__(self, rules: Iterable[AclRule] | None = None, strategy: str = "blacklist") -> None:
        """Initialize the rule set.

        Args:
            rules: Rules in priority order.
            strategy: ``blacklist`` or ``whitelist``.

        Raises:
            ValueError: If ``strategy`` is unknown.
        """
        if strategy not in STRATEGIES:
            known = ", ".join(sorted(STRATEGIES))
            raise ValueError(f"Unknown ACL strategy '{strategy}'. Known strategies: {known}")
        self._rules: list[AclRule] = list(rules) if rules else []
        self.strategy = strategy

    @classmethod
    def from_dicts(cls, rules: Iterable[Mapping[str, Any]], strategy: str = "blacklist") -> RuleACL:
        """Build from plain mappings with ``disk``, ``path`` and ``access`` keys.

        Raises:
            ValueError: On a missing key or an unknown access level.
        """
        return cls([parse_rule(raw) for raw in rules], strategy)

    def get_access_level(self, disk: str, path: str) -> int:
        """Return the access level of ``path`` on ``disk``."""
        for rule in self._rules:
            if rule.matches(disk, path):
                return rule.access
        logger.debug("No ACL rule for %s:%s, using %s strategy", disk, path, self.strategy)
        return STRATEGIES[self.strategy]


def parse_rule(raw: Mapping[str, Any]) -> AclRule:
    """Validate and convert one rule mapping.

    Raises:
        ValueError: On a missing key or an unknown access level.
    """
    missing = [key for key in ("disk", "path", "access") if key not in raw]
    if missing:
        raise ValueError(f"ACL rule {dict(raw)!r} is missing: {', '.join(missing)}")
    access = raw["access"]
    if isinstance(access, bool) or access not in ACCESS_LEVELS:
        raise ValueError(f"Invalid access level {access!r}, expected one of 0, 1, 2")
    return AclRule(disk=str(raw["disk"]), path=str(raw["path"]), access=access)
