"""GitHubClient - GraphQL access to a GitHub Project (ProjectsV2) board."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from projectsync.github.exceptions import FetchError, GitHubError, MutateError
from projectsync.logging import get_logger, sanitize_for_log, truncate_output
from projectsync.sync.models import ItemSnapshot
from projectsync.sync.schema import ProjectSchema, build_project_schema

if TYPE_CHECKING:
    from datetime import date

logger = get_logger("github")

# Fields fetched per request; larger boards are only partially indexed
FIELDS_PAGE_SIZE = 100


class GitHubClient:
    """Client for the GitHub GraphQL API, scoped to project and issue calls."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com/graphql",
    ) -> None:
        """Initialize GitHubClient.

        Args:
            token: GitHub token with project and issue write scopes
            base_url: GitHub GraphQL API URL (for testing/enterprise)
        """
        self.token = token
        self.base_url = base_url
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GraphQL API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query or mutation.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            Response data

        Raises:
            GitHubError: If the request fails, GraphQL returns errors, or the
                response body is not a JSON object
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            raise GitHubError(f"GraphQL request failed: {e}") from e

        if response.status_code != 200:
            raise GitHubError(
                f"GraphQL request failed: {response.status_code} - {sanitize_for_log(response.text)}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GitHubError(
                f"GraphQL response is not JSON: {sanitize_for_log(truncate_output(response.text))}"
            ) from e
        if not isinstance(data, dict):
            raise GitHubError(f"GraphQL response is not an object: {type(data).__name__}")
        if data.get("errors"):
            raise GitHubError(f"GraphQL errors: {data['errors']}")

        result = data.get("data") or {}
        if not isinstance(result, dict):
            raise GitHubError(f"GraphQL data is not an object: {type(result).__name__}")
        return result

    def _query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            return self._graphql(query, variables)
        except FetchError:
            raise
        except GitHubError as e:
            raise FetchError(str(e)) from e

    def _mutate(self, mutation: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            return self._graphql(mutation, variables)
        except MutateError:
            raise
        except GitHubError as e:
            raise MutateError(str(e)) from e

    def fetch_project_schema(self, organization: str, project_number: int) -> ProjectSchema:
        """Fetch an organization project's fields.

        Args:
            organization: Organization login
            project_number: Project number (visible in project URL)

        Returns:
            ProjectSchema indexed by field id and field name

        Raises:
            FetchError: If the query fails or the project doesn't exist
        """
        query = """
        query($organization: String!, $projectNumber: Int!, $first: Int!) {
            organization(login: $organization) {
                id
                projectV2(number: $projectNumber) {
                    id
                    fields(first: $first) {
                        totalCount
                        pageInfo {
                            hasNextPage
                        }
                        nodes {
                            ... on ProjectV2FieldCommon {
                                id
                                name
                            }
                            ... on ProjectV2SingleSelectField {
                                options {
                                    id
                                    name
                                }
                            }
                        }
                    }
                }
            }
        }
        """
        data = self._query(
            query,
            {
                "organization": organization,
                "projectNumber": project_number,
                "first": FIELDS_PAGE_SIZE,
            },
        )

        org = data.get("organization") or {}
        project = org.get("projectV2")
        if not project:
            raise FetchError(f"Project #{project_number} not found for organization {organization}")

        fields = project.get("fields") or {}
        if (fields.get("pageInfo") or {}).get("hasNextPage"):
            total = fields.get("totalCount") or 0
            logger.warning(
                "Project #%d has %d fields, only the first %d are indexed (%d skipped)",
                project_number,
                total,
                FIELDS_PAGE_SIZE,
                max(total - FIELDS_PAGE_SIZE, 0),
            )

        return build_project_schema(project, organization_id=str(org.get("id") or ""))

    def fetch_field_ids_by_name(self, node_id: str) -> dict[str, str]:
        """Get ids by lower-cased name for a project's fields or an org's issue types.

        Args:
            node_id: Node id of a ProjectV2 or an Organization

        Returns:
            Mapping of lower-cased name to node id

        Raises:
            FetchError: If the query fails
        """
        query = """
        query($id: ID!, $first: Int!) {
            node(id: $id) {
                ... on ProjectV2 {
                    fields(first: $first) {
                        nodes {
                            ... on ProjectV2FieldCommon {
                                id
                                name
                            }
                        }
                    }
                }
                ... on Organization {
                    issueTypes(first: $first) {
                        nodes {
                            id
                            name
                        }
                    }
                }
            }
        }
        """
        data = self._query(query, {"id": node_id, "first": FIELDS_PAGE_SIZE})

        node = data.get("node") or {}
        container = node.get("fields") or node.get("issueTypes") or {}
        ids: dict[str, str] = {}
        for entry in container.get("nodes") or []:
            if entry and entry.get("name") and entry.get("id"):
                ids[str(entry["name"]).lower()] = str(entry["id"])
        return ids

    def fetch_item_snapshot(self, item_node_id: str) -> ItemSnapshot:
        """Get Status, Start date and End date of a project item.

        Args:
            item_node_id: Project item node id

        Returns:
            ItemSnapshot, with "" for unset values

        Raises:
            FetchError: If the query fails
        """
        query = """
        query($itemId: ID!) {
            node(id: $itemId) {
                ... on ProjectV2Item {
                    id
                    currentStatus: fieldValueByName(name: "Status") {
                        ... on ProjectV2ItemFieldSingleSelectValue {
                            name
                        }
                    }
                    currentStartDate: fieldValueByName(name: "Start date") {
                        ... on ProjectV2ItemFieldDateValue {
                            date
                        }
                    }
                    currentEndDate: fieldValueByName(name: "End date") {
                        ... on ProjectV2ItemFieldDateValue {
                            date
                        }
                    }
                }
            }
        }
        """
        data = self._query(query, {"itemId": item_node_id})

        node = data.get("node") or {}
        return ItemSnapshot(
            status=str((node.get("currentStatus") or {}).get("name") or ""),
            start_date=str((node.get("currentStartDate") or {}).get("date") or ""),
            end_date=str((node.get("currentEndDate") or {}).get("date") or ""),
        )

    def mutate_field_value(self, project_id: str, item_id: str, field_id: str, value: date) -> None:
        """Set a date field on a project item.

        Raises:
            MutateError: If the mutation fails
        """
        mutation = """
        mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $date: Date!) {
            updateProjectV2ItemFieldValue(
                input: {
                    projectId: $projectId
                    itemId: $itemId
                    fieldId: $fieldId
                    value: { date: $date }
                }
            ) {
                projectV2Item {
                    id
                }
            }
        }
        """
        logger.debug("Updating field %s on item %s to %s", field_id, item_id, value)
        self._mutate(
            mutation,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "date": value.isoformat(),
            },
        )

    def add_item_to_board(self, project_id: str, content_node_id: str) -> str:
        """Add an issue or pull request to the project.

        Adding content that is already on the board returns the existing item.

        Returns:
            Project item node id

        Raises:
            MutateError: If the mutation fails
        """
        mutation = """
        mutation($projectId: ID!, $contentId: ID!) {
            addProjectV2ItemById(input: { projectId: $projectId, contentId: $contentId }) {
                item {
                    id
                }
            }
        }
        """
        data = self._mutate(mutation, {"projectId": project_id, "contentId": content_node_id})

        item = (data.get("addProjectV2ItemById") or {}).get("item") or {}
        item_id = item.get("id")
        if not item_id:
            raise MutateError(f"No project item returned for {content_node_id}")
        return str(item_id)

    def set_issue_type(self, issue_node_id: str, type_id: str) -> None:
        """Set the issue type of an issue.

        Raises:
            MutateError: If the mutation fails
        """
        mutation = """
        mutation($issueId: ID!, $issueTypeId: ID!) {
            updateIssueIssueType(input: { issueId: $issueId, issueTypeId: $issueTypeId }) {
                issue {
                    id
                }
            }
        }
        """
        self._mutate(mutation, {"issueId": issue_node_id, "issueTypeId": type_id})
