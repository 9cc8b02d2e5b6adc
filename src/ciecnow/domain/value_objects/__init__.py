"""Domain value objects."""

from ciecnow.domain.value_objects.capability import Action, Capability, Subject
from ciecnow.domain.value_objects.fiscal_period import (
    FiscalPeriod,
    PeriodOption,
    available_periods,
    default_start_year,
)
from ciecnow.domain.value_objects.permission_set import PermissionSet
from ciecnow.domain.value_objects.session_state import ActivityKind, AuthEvent, SessionState

__all__ = [
    "Action",
    "ActivityKind",
    "AuthEvent",
    "Capability",
    "FiscalPeriod",
    "PeriodOption",
    "PermissionSet",
    "SessionState",
    "Subject",
    "available_periods",
    "default_start_year",
]
