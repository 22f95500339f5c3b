"""Date automation for project items whose Status changes."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

from projectsync.logging import get_logger
from projectsync.sync.events import EDITED_ACTION
from projectsync.sync.exceptions import SchemaGapError
from projectsync.sync.models import FieldUpdate, ItemSnapshot
from projectsync.sync.schema import Field, SingleSelectField

if TYPE_CHECKING:
    from projectsync.sync.events import WebhookEvent
    from projectsync.sync.schema import ProjectSchema

logger = get_logger("sync.policy")

STATUS_FIELD = "Status"
START_DATE_FIELD = "Start date"
END_DATE_FIELD = "End date"
IN_PROGRESS_STATUS = "In progress"
DONE_STATUS = "Done"
SINGLE_SELECT_TYPE = "single_select"


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class FieldUpdatePolicy:
    """Decides which date field, if any, a Status change should fill in.

    Rules, evaluated against the item's current values in this order:

    1. Status "In progress" and no start date -> set "Start date".
    2. Status "Done" and no end date -> set "End date".

    The first matching rule wins, so if both could apply "Start date" is set.
    Dates that are already set are never overwritten.
    """

    def __init__(self, today: Callable[[], date] = _utc_today) -> None:
        self._today = today

    def decide(
        self,
        event: WebhookEvent,
        schema: ProjectSchema,
        fetch_snapshot: Callable[[str], ItemSnapshot],
    ) -> FieldUpdate | None:
        """Decide the date update for a project item edit.

        Args:
            event: The decoded project item delivery.
            schema: Board field snapshot.
            fetch_snapshot: Returns the item's current values by item node id.

        Returns:
            The FieldUpdate to apply, or None when nothing should change.

        Raises:
            SchemaGapError: If the changed field or the target date field is
                unknown, or the Status field is not single-select.
            FetchError: If fetching the item's values fails.
        """
        if event.action != EDITED_ACTION:
            return None

        field_change = event.changes.get("field_value")
        if not field_change:
            logger.debug("No field value change")
            return None

        if field_change.get("field_type") != SINGLE_SELECT_TYPE:
            return None

        field_node_id = str(field_change.get("field_node_id") or "")
        descriptor = schema.field_by_id(field_node_id)
        if descriptor is None:
            raise SchemaGapError(f"Field {field_node_id!r} is not in the project snapshot")

        match descriptor:
            case SingleSelectField(name=name):
                logger.info("Field updated: %s", name)
                if name != STATUS_FIELD:
                    return None
            case Field(name=name):
                if name == STATUS_FIELD:
                    raise SchemaGapError(f"Field {STATUS_FIELD!r} is not a single-select field")
                return None

        item = event.projects_v2_item
        if item is None or not item.node_id:
            logger.info("No project item node id")
            return None

        snapshot = fetch_snapshot(item.node_id)
        target = self._target_field(snapshot)
        if target is None:
            return None

        target_descriptor = schema.field_by_name(target)
        if target_descriptor is None:
            raise SchemaGapError(f"Field {target!r} is not in the project snapshot")

        return FieldUpdate(field_name=target, field_id=target_descriptor.id, value=self._today())

    @staticmethod
    def _target_field(snapshot: ItemSnapshot) -> str | None:
        if snapshot.status == IN_PROGRESS_STATUS and not snapshot.start_date:
            return START_DATE_FIELD
        if snapshot.status == DONE_STATUS and not snapshot.end_date:
            return END_DATE_FIELD
        return None
