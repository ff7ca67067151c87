"""Writers that project the Jira configuration into each tool's files."""

from jira_ticket_skills.writers.gitignore import update_gitignore
from jira_ticket_skills.writers.mcp import build_servers, install_mcp, uninstall_mcp
from jira_ticket_skills.writers.settings import install_settings, uninstall_settings
from jira_ticket_skills.writers.skill import install_skill, uninstall_skill

__all__ = [
    "build_servers",
    "install_mcp",
    "uninstall_mcp",
    "install_settings",
    "uninstall_settings",
    "install_skill",
    "uninstall_skill",
    "update_gitignore",
]
