"""Webhook payload models and event classification."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from projectsync.sync.exceptions import DecodeError

EDITED_ACTION = "edited"
CREATED_ACTION = "created"
OPENED_ACTION = "opened"

# Issue actions that file the issue onto the board and stamp its type
ISSUE_ACTIONS = frozenset({"edited", "reopened", "opened", "created"})


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # GitHub sends explicit nulls for absent objects; treat them as missing
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class GitHubEntity(_Payload):
    """A user or organization reference."""

    login: str = ""


class ProjectV2Item(_Payload):
    """The ``projects_v2_item`` object of a project item event."""

    id: int | None = None
    node_id: str = ""
    project_node_id: str = ""
    content_node_id: str = ""
    content_type: str = ""
    creator: GitHubEntity | None = None
    created_at: str | None = None
    updated_at: str | None = None
    archived_at: str | None = None


class PullRequest(_Payload):
    """The ``pull_request`` object of a pull request event."""

    id: int | None = None
    node_id: str = ""
    number: int = 0
    state: str = ""
    title: str = ""


class Issue(_Payload):
    """The ``issue`` object of an issue event."""

    id: int | None = None
    node_id: str = ""
    number: int = 0
    state: str = ""
    title: str = ""


class Repository(_Payload):
    """The ``repository`` object present on repository-scoped events."""

    id: int | None = None
    name: str = ""
    full_name: str = ""


class WebhookEvent(_Payload):
    """A decoded webhook delivery."""

    action: str = ""
    projects_v2_item: ProjectV2Item | None = None
    changes: dict[str, dict[str, Any]] = {}
    organization: GitHubEntity | None = None
    sender: GitHubEntity | None = None
    pull_request: PullRequest | None = None
    issue: Issue | None = None
    repository: Repository | None = None

    @property
    def repo_name(self) -> str:
        return self.repository.full_name if self.repository else ""


class EventCategory(str, Enum):
    """What a delivery asks the sync to do."""

    ITEM_ADDED = "item_added"
    ITEM_EDITED = "item_edited"
    ITEM_OTHER = "item_other"
    PULL_REQUEST_OPENED = "pull_request_opened"
    PULL_REQUEST_OTHER = "pull_request_other"
    ISSUE_ACTIONABLE = "issue_actionable"
    ISSUE_OTHER = "issue_other"
    UNHANDLED = "unhandled"


def decode_event(body: bytes | str) -> WebhookEvent:
    """Decode a webhook body.

    Args:
        body: Raw JSON request body.

    Returns:
        The decoded WebhookEvent.

    Raises:
        DecodeError: If the body is not JSON or does not fit the event shape.
    """
    try:
        return WebhookEvent.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Invalid webhook payload: {e.error_count()} error(s)") from e


def classify_event(event: WebhookEvent) -> list[EventCategory]:
    """Classify a delivery.

    Each populated sub-object contributes its own category, in the order
    project item, pull request, issue. A delivery matching none of them is
    classified as UNHANDLED.
    """
    categories: list[EventCategory] = []

    item = event.projects_v2_item
    if item is not None and (item.node_id or item.id):
        if event.action == EDITED_ACTION:
            categories.append(EventCategory.ITEM_EDITED)
        elif event.action == CREATED_ACTION:
            categories.append(EventCategory.ITEM_ADDED)
        else:
            categories.append(EventCategory.ITEM_OTHER)

    if event.pull_request is not None:
        if event.action == OPENED_ACTION:
            categories.append(EventCategory.PULL_REQUEST_OPENED)
        else:
            categories.append(EventCategory.PULL_REQUEST_OTHER)

    if event.issue is not None:
        if event.action in ISSUE_ACTIONS:
            categories.append(EventCategory.ISSUE_ACTIONABLE)
        else:
            categories.append(EventCategory.ISSUE_OTHER)

    if not categories:
        categories.append(EventCategory.UNHANDLED)
    return categories
