"""Project field metadata snapshot and lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from projectsync.logging import get_logger

logger = get_logger("sync.schema")


@dataclass(frozen=True)
class Field:
    """A plain project field, or one option of a single-select field."""

    id: str
    name: str


@dataclass(frozen=True)
class SingleSelectField:
    """A single-select project field (e.g. Status) with its options by id."""

    id: str
    name: str
    options: dict[str, Field] = field(default_factory=dict)


FieldDescriptor: TypeAlias = Field | SingleSelectField


@dataclass
class ProjectSchema:
    """Snapshot of a board's fields, taken once at startup.

    Attributes:
        id: Node id of the project.
        organization_id: Node id of the organization owning the project.
        by_id: Field descriptors keyed by field node id.
        by_name: The same descriptors keyed by field name.
    """

    id: str
    organization_id: str = ""
    by_id: dict[str, FieldDescriptor] = field(default_factory=dict)
    by_name: dict[str, FieldDescriptor] = field(default_factory=dict)

    def add(self, descriptor: FieldDescriptor) -> None:
        """Index a descriptor under both its id and its name."""
        if not descriptor.id or not descriptor.name:
            logger.debug("Skipping field without id or name: %r", descriptor)
            return
        previous = self.by_name.get(descriptor.name)
        if previous is not None and previous.id != descriptor.id:
            logger.warning(
                "Field name %r is used by %s and %s; lookups by name resolve to %s",
                descriptor.name,
                previous.id,
                descriptor.id,
                descriptor.id,
            )
        self.by_id[descriptor.id] = descriptor
        self.by_name[descriptor.name] = descriptor

    def field_by_id(self, field_id: str) -> FieldDescriptor | None:
        return self.by_id.get(field_id)

    def field_by_name(self, name: str) -> FieldDescriptor | None:
        return self.by_name.get(name)


def _descriptor_from_node(node: dict[str, Any]) -> FieldDescriptor:
    field_id = str(node.get("id") or "")
    name = str(node.get("name") or "")

    # Only single-select fields carry an options list in the fields query
    if node.get("options") is not None:
        options = {
            str(option["id"]): Field(id=str(option["id"]), name=str(option.get("name") or ""))
            for option in node["options"]
            if option.get("id")
        }
        return SingleSelectField(id=field_id, name=name, options=options)

    return Field(id=field_id, name=name)


def build_project_schema(
    project_node: dict[str, Any], organization_id: str = ""
) -> ProjectSchema:
    """Build a ProjectSchema from a ``projectV2`` GraphQL node.

    Args:
        project_node: Dict with ``id`` and ``fields.nodes``.
        organization_id: Node id of the owning organization.

    Returns:
        ProjectSchema with every named field indexed by id and by name.
    """
    schema = ProjectSchema(id=str(project_node.get("id") or ""), organization_id=organization_id)

    nodes = (project_node.get("fields") or {}).get("nodes") or []
    for node in nodes:
        if not node:
            continue
        schema.add(_descriptor_from_node(node))

    logger.info("Indexed %d field(s) for project %s", len(schema.by_id), schema.id)
    return schema
