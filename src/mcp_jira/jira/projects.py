"""Module for Jira project operations."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..models.jira import JiraProject, JiraProjectMember
from .client import JiraClient

logger = logging.getLogger("mcp-jira.projects")

MAX_ROLE_WORKERS = 8


class ProjectsMixin(JiraClient):
    """Mixin for Jira project operations."""

    def get_all_projects(self) -> list[JiraProject]:
        data = self._request("GET", "rest/api/3/project")
        if not isinstance(data, list):
            return []
        return [JiraProject.from_api_response(item) for item in data if isinstance(item, dict)]

    def get_project_roles(self, project_key: str) -> dict[str, str]:
        """
        Get the roles defined for a project.

        Args:
            project_key: The project key

        Returns:
            Mapping of role name to the role's REST URL
        """
        data = self._request(
            "GET",
            f"rest/api/3/project/{project_key}/role",
            resource=("project", project_key),
        )
        return data if isinstance(data, dict) else {}

    def get_project_role(self, project_key: str, role_url: str) -> dict[str, Any]:
        """Fetch one role, with its actors, from the URL listed by ``get_project_roles``."""
        role_id = role_url.rstrip("/").rsplit("/", 1)[-1]
        data = self._request(
            "GET",
            f"rest/api/3/project/{project_key}/role/{role_id}",
            resource=("project", project_key),
        )
        return data if isinstance(data, dict) else {}

    def get_project_members(self, project_key: str) -> list[JiraProjectMember]:
        """
        Collect every actor of every project role.

        Role details are fetched concurrently. Members are merged by display
        name and keep the roles in the order the role list was returned.

        Args:
            project_key: The project key

        Returns:
            Members in first-seen order

        Raises:
            MCPJiraError: If the role list or any role detail fails to load
        """
        roles = self.get_project_roles(project_key)
        if not roles:
            return []

        with ThreadPoolExecutor(max_workers=min(MAX_ROLE_WORKERS, len(roles))) as executor:
            futures = {
                name: executor.submit(self.get_project_role, project_key, url)
                for name, url in roles.items()
            }
            details = {name: future.result() for name, future in futures.items()}

        members: dict[str, JiraProjectMember] = {}
        for role_name in roles:
            role = details[role_name]
            for actor in role.get("actors") or []:
                if not isinstance(actor, dict):
                    continue
                member = JiraProjectMember.from_api_response(
                    actor, role=role.get("name") or role_name
                )
                existing = members.get(member.display_name)
                if existing is None:
                    members[member.display_name] = member
                else:
                    for role_label in member.roles:
                        if role_label not in existing.roles:
                            existing.roles.append(role_label)
        logger.debug(f"Found {len(members)} members across {len(roles)} roles in {project_key}")
        return list(members.values())
