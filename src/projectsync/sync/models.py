"""Data models for the sync module."""

from dataclasses import dataclass
from datetime import date


@dataclass
class ItemSnapshot:
    """Current Status and date values of a project item.

    Attributes:
        status: Name of the selected Status option, "" when unset.
        start_date: Value of "Start date", "" when unset.
        end_date: Value of "End date", "" when unset.
    """

    status: str = ""
    start_date: str = ""
    end_date: str = ""


@dataclass
class FieldUpdate:
    """A date field the policy decided to set."""

    field_name: str
    field_id: str
    value: date


@dataclass
class ActionResult:
    """Outcome of one action taken for a delivery.

    Attributes:
        action: Short action name (e.g. "add_issue", "set_issue_type").
        success: Whether the action completed.
        detail: Human-readable outcome, or the error message.
    """

    action: str
    success: bool
    detail: str = ""
