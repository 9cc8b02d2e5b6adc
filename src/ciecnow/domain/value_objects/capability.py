"""Capability - an (action, subject) pair granted through a role."""

from dataclasses import dataclass
from enum import StrEnum

KEY_SEPARATOR = ":"


class Action(StrEnum):
    """Verbs a permission can grant."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"


class Subject(StrEnum):
    """Domain nouns a permission applies to."""

    MEETING = "Meeting"
    EVENT = "Event"
    EVENT_CATEGORY = "EventCategory"
    COMMISSION = "Commission"
    DEPARTMENT = "Department"
    PARTICIPANT = "Participant"
    COMPANY = "Company"
    TASK = "Task"
    ASSISTANCE_LOG = "AssistanceLog"
    COMMUNICATION = "Communication"
    REPORT = "Report"
    USERS = "Users"
    ROLES = "Roles"


@dataclass(frozen=True)
class Capability:
    """One allowed operation, keyed structurally instead of by string."""

    action: Action
    subject: Subject

    @classmethod
    def of(cls, action: Action | str, subject: Subject | str) -> "Capability":
        """Build from enum members or their string values.

        Raises ValueError when either part is outside the vocabulary.
        """
        return cls(action=Action(action), subject=Subject(subject))

    @classmethod
    def parse(cls, key: str) -> "Capability":
        """Parse a wire key such as ``"create:Meeting"``."""
        action, sep, subject = key.partition(KEY_SEPARATOR)
        if not sep or not action or not subject:
            raise ValueError(f"Malformed capability key: {key!r}")
        return cls.of(action.strip(), subject.strip())

    @property
    def key(self) -> str:
        """Wire key ``action:subject``."""
        return f"{self.action.value}{KEY_SEPARATOR}{self.subject.value}"

    def __str__(self) -> str:
        return self.key
