"""Shared test fixtures."""

import pytest

from jira_ticket_skills.config import LogicalConfig
from jira_ticket_skills.tools import Context


@pytest.fixture
def ctx(tmp_path):
    """A run context with separate project and home directories."""
    project = tmp_path / "project"
    home = tmp_path / "home"
    project.mkdir()
    home.mkdir()
    return Context(project_root=project, home=home)


@pytest.fixture
def sample_config():
    """Personal-token config for Claude Code with the Figma bridge."""
    return LogicalConfig(
        tools=("claude",),
        jira_url="https://jira.example.com",
        jira_token="secret-token",
        project_key="PRJ",
        figma_bridge=True,
    )


@pytest.fixture
def cloud_config():
    """API token + email config with both Figma integrations."""
    return LogicalConfig(
        tools=("cursor",),
        jira_url="https://example.atlassian.net",
        jira_token="api-token",
        project_key="WEB",
        auth_mode="api_token",
        jira_email="dev@example.com",
        jira_runner="uv",
        figma_bridge=True,
        figma_remote=True,
    )


@pytest.fixture
def snapshot():
    """Map every file under a directory to its content."""

    def _snapshot(root):
        return {
            str(p.relative_to(root)): p.read_text()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
