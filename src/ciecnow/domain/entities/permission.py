"""Permission entity - static (action, subject) reference data."""

from dataclasses import dataclass

from ciecnow.domain.value_objects.capability import Capability


@dataclass
class Permission:
    """Permission row. action/subject stay as stored; capability validates them."""

    id: int
    action: str
    subject: str

    @property
    def key(self) -> str:
        return f"{self.action}:{self.subject}"

    @property
    def capability(self) -> Capability:
        """Raises ValueError when the row is outside the known vocabulary."""
        return Capability.of(self.action, self.subject)
