"""Sync package - webhook classification and board field automation."""

from projectsync.sync.events import EventCategory, WebhookEvent, classify_event, decode_event
from projectsync.sync.exceptions import DecodeError, SchemaGapError, SyncError
from projectsync.sync.issue_types import TypeMapping
from projectsync.sync.models import ActionResult, FieldUpdate, ItemSnapshot
from projectsync.sync.orchestrator import BoardClient, SyncOrchestrator, load_issue_types
from projectsync.sync.policy import FieldUpdatePolicy
from projectsync.sync.schema import (
    Field,
    FieldDescriptor,
    ProjectSchema,
    SingleSelectField,
    build_project_schema,
)

__all__ = [
    "ActionResult",
    "BoardClient",
    "DecodeError",
    "EventCategory",
    "Field",
    "FieldDescriptor",
    "FieldUpdate",
    "FieldUpdatePolicy",
    "ItemSnapshot",
    "ProjectSchema",
    "SchemaGapError",
    "SingleSelectField",
    "SyncError",
    "SyncOrchestrator",
    "TypeMapping",
    "WebhookEvent",
    "build_project_schema",
    "classify_event",
    "decode_event",
    "load_issue_types",
]
