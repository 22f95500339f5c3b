"""SyncOrchestrator - turns webhook deliveries into board updates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from projectsync.github.exceptions import GitHubError
from projectsync.logging import get_logger
from projectsync.sync.events import EventCategory, classify_event
from projectsync.sync.exceptions import SchemaGapError
from projectsync.sync.models import ActionResult
from projectsync.sync.policy import FieldUpdatePolicy

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from projectsync.sync.events import WebhookEvent
    from projectsync.sync.issue_types import TypeMapping
    from projectsync.sync.models import ItemSnapshot
    from projectsync.sync.schema import ProjectSchema

logger = get_logger("sync.orchestrator")


class BoardClient(Protocol):
    """Interface for the board API used by the orchestrator."""

    def fetch_project_schema(self, organization: str, project_number: int) -> ProjectSchema:
        """Field snapshot of an organization project."""
        ...

    def fetch_field_ids_by_name(self, node_id: str) -> dict[str, str]:
        """Lower-cased name -> id for a project's fields or an org's issue types."""
        ...

    def fetch_item_snapshot(self, item_node_id: str) -> ItemSnapshot:
        """Current Status, Start date and End date of an item."""
        ...

    def mutate_field_value(self, project_id: str, item_id: str, field_id: str, value: date) -> None:
        """Set a date field on a project item."""
        ...

    def add_item_to_board(self, project_id: str, content_node_id: str) -> str:
        """Add an issue or PR to the project, returning the item id."""
        ...

    def set_issue_type(self, issue_node_id: str, type_id: str) -> None:
        """Set the issue type of an issue."""
        ...


def load_issue_types(client: BoardClient, schema: ProjectSchema, type_mapping: TypeMapping) -> int:
    """Fill ``type_mapping.type_to_id`` from the organization's issue types.

    Args:
        client: Board API client.
        schema: Project snapshot carrying the organization node id.
        type_mapping: Mapping to populate.

    Returns:
        Number of type labels resolved.

    Raises:
        FetchError: If the issue type lookup fails.
    """
    if not schema.organization_id:
        logger.warning("No organization id in project snapshot, issue types not loaded")
        return 0

    ids_by_name = client.fetch_field_ids_by_name(schema.organization_id)
    resolved = 0
    for type_name in sorted(set(type_mapping.prefix_to_type.values())):
        type_id = ids_by_name.get(type_name.lower())
        if type_id is None:
            logger.warning("Issue type '%s' not found in organization", type_name)
            continue
        type_mapping.set_type_id(type_name, type_id)
        resolved += 1

    logger.info("Loaded %d issue type id(s)", resolved)
    return resolved


class SyncOrchestrator:
    """Handles webhook deliveries against one project board.

    For every delivery it:
    - Adds newly opened pull requests to the board
    - Adds opened/edited issues to the board and sets their issue type
    - Fills in Start date / End date when an item's Status changes

    Actions are independent and best-effort. A failure is logged and recorded
    in the returned results, and the remaining actions still run.
    """

    def __init__(
        self,
        client: BoardClient,
        schema: ProjectSchema,
        type_mapping: TypeMapping,
        policy: FieldUpdatePolicy | None = None,
    ) -> None:
        """Initialize the SyncOrchestrator.

        Args:
            client: Board API client.
            schema: Project field snapshot taken at startup.
            type_mapping: Title prefix and issue type mapping.
            policy: Date automation policy. Defaults to FieldUpdatePolicy().
        """
        self.client = client
        self.schema = schema
        self.type_mapping = type_mapping
        self.policy = policy or FieldUpdatePolicy()

    def handle(self, event: WebhookEvent) -> list[ActionResult]:
        """Handle one delivery.

        Args:
            event: The decoded webhook event.

        Returns:
            Results of the actions attempted, in order. Empty when the
            delivery required no action.
        """
        logger.info("Event action: %s", event.action)
        results: list[ActionResult] = []

        for category in classify_event(event):
            match category:
                case EventCategory.ITEM_EDITED:
                    results.extend(self._handle_item_edited(event))
                case EventCategory.PULL_REQUEST_OPENED:
                    results.append(self._add_pull_request(event))
                case EventCategory.ISSUE_ACTIONABLE:
                    results.append(self._add_issue(event))
                    type_result = self._assign_issue_type(event)
                    if type_result is not None:
                        results.append(type_result)
                case _:
                    logger.info("No action for %s (action=%s)", category.value, event.action)

        return results

    def _run(self, action: str, func: Callable[[], str | None]) -> ActionResult:
        """Run one action, converting any failure into a failed result."""
        try:
            detail = func()
        except SchemaGapError as e:
            logger.warning("%s skipped, board is missing configuration: %s", action, e)
            return ActionResult(action=action, success=False, detail=str(e))
        except GitHubError as e:
            logger.error("%s failed: %s", action, e)
            return ActionResult(action=action, success=False, detail=str(e))
        except Exception as e:
            logger.exception("%s failed unexpectedly: %s", action, e)
            return ActionResult(action=action, success=False, detail=f"Unexpected error: {e}")
        return ActionResult(action=action, success=True, detail=detail or "")

    def _handle_item_edited(self, event: WebhookEvent) -> list[ActionResult]:
        logger.info("Project item edited")
        try:
            update = self.policy.decide(event, self.schema, self.client.fetch_item_snapshot)
        except SchemaGapError as e:
            logger.warning("Date update skipped, board is missing configuration: %s", e)
            return [ActionResult(action="update_date", success=False, detail=str(e))]
        except GitHubError as e:
            logger.error("Failed to fetch project item values: %s", e)
            return [ActionResult(action="update_date", success=False, detail=str(e))]
        except Exception as e:
            logger.exception("Failed to decide date update: %s", e)
            return [ActionResult(action="update_date", success=False, detail=f"Unexpected error: {e}")]

        item = event.projects_v2_item
        if update is None or item is None:
            return []

        project_id = item.project_node_id or self.schema.id

        def apply() -> str:
            logger.info("Updating %s on item %s", update.field_name, item.node_id)
            self.client.mutate_field_value(project_id, item.node_id, update.field_id, update.value)
            return f"{update.field_name} set to {update.value.isoformat()}"

        return [self._run("update_date", apply)]

    def _add_pull_request(self, event: WebhookEvent) -> ActionResult:
        pr = event.pull_request
        if pr is None:
            return ActionResult(
                action="add_pull_request", success=False, detail="No pull request in payload"
            )
        logger.info("Adding PR %s#%d to project", event.repo_name, pr.number)

        def add() -> str:
            item_id = self.client.add_item_to_board(self.schema.id, pr.node_id)
            logger.info("Added PR to project as item: %s", item_id)
            return item_id

        return self._run("add_pull_request", add)

    def _add_issue(self, event: WebhookEvent) -> ActionResult:
        issue = event.issue
        if issue is None:
            return ActionResult(action="add_issue", success=False, detail="No issue in payload")
        logger.info("Adding issue %s#%d to project", event.repo_name, issue.number)

        def add() -> str:
            item_id = self.client.add_item_to_board(self.schema.id, issue.node_id)
            logger.info("Added issue to project as item: %s", item_id)
            return item_id

        return self._run("add_issue", add)

    def _assign_issue_type(self, event: WebhookEvent) -> ActionResult | None:
        """Set the issue type from the title prefix.

        Returns None when the title has no known prefix.
        """
        issue = event.issue
        if issue is None:
            return None
        type_name, found = self.type_mapping.get_type_from_title(issue.title)
        if not found:
            logger.info("No matching type found for title: %r", issue.title)
            return None

        logger.info("Detected type: %s", type_name)

        def assign() -> str:
            type_id, exists = self.type_mapping.get_type_id(type_name)
            if not exists:
                raise SchemaGapError(f"Type '{type_name}' not found in organization issue types")
            self.client.set_issue_type(issue.node_id, type_id)
            logger.info("Assigned type '%s' to issue %s#%d", type_name, event.repo_name, issue.number)
            return type_name

        return self._run("set_issue_type", assign)
