"""Permission set - answers can(action, subject) for one actor."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ciecnow.domain.exceptions import PermissionDenied
from ciecnow.domain.value_objects.capability import Action, Capability, Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionSet:
    """Capabilities resolved for an actor at session-load time.

    A super-role set grants everything regardless of its capabilities.
    """

    capabilities: frozenset[Capability] = field(default_factory=frozenset)
    is_super: bool = False

    @classmethod
    def empty(cls) -> "PermissionSet":
        return cls()

    @classmethod
    def superuser(cls) -> "PermissionSet":
        return cls(is_super=True)

    @classmethod
    def from_capabilities(cls, capabilities: Iterable[Capability]) -> "PermissionSet":
        return cls(capabilities=frozenset(capabilities))

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "PermissionSet":
        """Build from ``action:subject`` wire keys, skipping unusable entries."""
        capabilities = set()
        for key in keys:
            if not isinstance(key, str):
                logger.warning("Skipping non-string permission key %r", key)
                continue
            try:
                capabilities.add(Capability.parse(key))
            except ValueError:
                logger.warning("Skipping unknown permission key %r", key)
        return cls(capabilities=frozenset(capabilities))

    def can(self, action: Action | str, subject: Subject | str) -> bool:
        """Whether the actor may perform action on subject. Never raises."""
        if self.is_super:
            return True
        try:
            capability = Capability.of(action, subject)
        except ValueError:
            return False
        return capability in self.capabilities

    def require(self, action: Action | str, subject: Subject | str) -> None:
        """Raise PermissionDenied unless can(action, subject)."""
        if not self.can(action, subject):
            raise PermissionDenied(f"Missing permission {action}:{subject}")

    @property
    def keys(self) -> list[str]:
        """Sorted wire keys of the granted capabilities."""
        return sorted(c.key for c in self.capabilities)

    def __len__(self) -> int:
        return len(self.capabilities)
