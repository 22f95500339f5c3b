"""Shared pytest fixtures and configuration."""

import pytest

from projectsync.sync import Field, ProjectSchema, SingleSelectField, TypeMapping


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the real GitHub API (local only)")


# Shared fixtures


@pytest.fixture
def project_schema() -> ProjectSchema:
    """A board with Status, Priority, Title, Start date and End date."""
    schema = ProjectSchema(id="PVT_project", organization_id="O_org")
    schema.add(
        SingleSelectField(
            id="PVTSSF_status",
            name="Status",
            options={
                "opt_todo": Field(id="opt_todo", name="Todo"),
                "opt_progress": Field(id="opt_progress", name="In progress"),
                "opt_done": Field(id="opt_done", name="Done"),
            },
        )
    )
    schema.add(
        SingleSelectField(
            id="PVTSSF_priority",
            name="Priority",
            options={"opt_p1": Field(id="opt_p1", name="P1")},
        )
    )
    schema.add(Field(id="PVTF_title", name="Title"))
    schema.add(Field(id="PVTF_start", name="Start date"))
    schema.add(Field(id="PVTF_end", name="End date"))
    return schema


@pytest.fixture
def type_mapping() -> TypeMapping:
    """TypeMapping with ids for Feature and Bug only."""
    mapping = TypeMapping()
    mapping.set_type_id("Feature", "IT_feature")
    mapping.set_type_id("Bug", "IT_bug")
    return mapping


def item_edited_payload(
    field_node_id: str = "PVTSSF_status",
    field_type: str = "single_select",
    item_node_id: str = "PVTI_item",
) -> dict:
    """Build a projects_v2_item "edited" delivery."""
    return {
        "action": "edited",
        "projects_v2_item": {
            "id": 1001,
            "node_id": item_node_id,
            "project_node_id": "PVT_project",
            "content_node_id": "I_issue",
            "content_type": "Issue",
            "creator": {"login": "octocat"},
            "created_at": "2025-03-01T10:00:00Z",
            "updated_at": "2025-03-14T10:00:00Z",
            "archived_at": None,
        },
        "changes": {
            "field_value": {
                "field_node_id": field_node_id,
                "field_type": field_type,
            }
        },
        "organization": {"login": "acme"},
        "sender": {"login": "octocat"},
    }


def issue_payload(action: str = "opened", title: str = "feat(api): add x") -> dict:
    """Build an issues delivery."""
    return {
        "action": action,
        "issue": {
            "id": 501,
            "node_id": "I_issue",
            "number": 42,
            "state": "open",
            "title": title,
        },
        "repository": {"id": 9, "name": "widgets", "full_name": "acme/widgets"},
        "organization": {"login": "acme"},
        "sender": {"login": "octocat"},
    }


def pull_request_payload(action: str = "opened") -> dict:
    """Build a pull_request delivery."""
    return {
        "action": action,
        "pull_request": {
            "id": 701,
            "node_id": "PR_pull",
            "number": 7,
            "state": "open",
            "title": "chore: bump deps",
        },
        "repository": {"id": 9, "name": "widgets", "full_name": "acme/widgets"},
        "organization": {"login": "acme"},
        "sender": {"login": "octocat"},
    }


@pytest.fixture
def make_item_edited():
    """Factory for projects_v2_item "edited" payloads."""
    return item_edited_payload


@pytest.fixture
def make_issue():
    """Factory for issues payloads."""
    return issue_payload


@pytest.fixture
def make_pull_request():
    """Factory for pull_request payloads."""
    return pull_request_payload
