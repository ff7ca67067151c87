"""Built-in descriptors for the supported AI coding tools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

from jira_ticket_skills.errors import UnknownTool

ToolKey = Literal["claude", "cursor", "antigravity"]

SKILL_NAME = "resolve-jira-ticket"
PROJECT_KEY_FIELD = "JIRA_PROJECT_KEY"


@dataclass(frozen=True)
class Context:
    """Filesystem roots for one run.

    Every component receives these explicitly instead of calling
    Path.cwd() or Path.home() itself.
    """

    project_root: Path
    home: Path

    def display(self, path: Path) -> str:
        """Relative for project files, ~ for home files, absolute otherwise."""
        try:
            return str(path.relative_to(self.project_root))
        except ValueError:
            pass
        try:
            return "~/" + str(path.relative_to(self.home))
        except ValueError:
            return str(path)


@dataclass(frozen=True)
class StructuredSettings:
    """JSON settings file; the project key lives under ``key_path``."""

    path: str
    key_path: tuple[str, ...]


@dataclass(frozen=True)
class FreeformSettings:
    """Rules document regenerated from ``template`` on every install."""

    path: str
    template: str


SettingsShape = Union[StructuredSettings, FreeformSettings]


@dataclass(frozen=True)
class ToolDescriptor:
    """Where one tool keeps its skills, MCP servers and settings."""

    key: str
    label: str
    skill_dir: str
    mcp_config: str
    settings: SettingsShape
    markers: tuple[str, ...]
    gitignore_entries: tuple[str, ...]
    skill_file: str = "SKILL.md"
    workflow_dir: str | None = None
    workflow_file: str | None = None
    mcp_scope: Literal["project", "home"] = "project"
    mcp_key: str = "mcpServers"
    home_markers: tuple[str, ...] = ()

    def skill_dir_path(self, ctx: Context) -> Path:
        return ctx.project_root / self.skill_dir

    def skill_path(self, ctx: Context) -> Path:
        return self.skill_dir_path(ctx) / self.skill_file

    def workflow_path(self, ctx: Context) -> Path | None:
        if not (self.workflow_dir and self.workflow_file):
            return None
        return ctx.project_root / self.workflow_dir / self.workflow_file

    def mcp_config_path(self, ctx: Context) -> Path:
        base = ctx.home if self.mcp_scope == "home" else ctx.project_root
        return base / self.mcp_config

    def settings_path(self, ctx: Context) -> Path:
        return ctx.project_root / self.settings.path


CURSOR_RULES_TEMPLATE = """\
---
description: Jira configuration for the resolve-jira-ticket skill
alwaysApply: true
---

# Jira Configuration

- Default project key: `{project_key}`
- Ticket IDs without a prefix belong to `{project_key}` (e.g. `123` means `{project_key}-123`).
"""

ANTIGRAVITY_RULES_TEMPLATE = """\
---
trigger: always_on
---

# Jira Configuration

- Default project key: `{project_key}`
- Ticket IDs without a prefix belong to `{project_key}` (e.g. `123` means `{project_key}-123`).
"""

TOOLS: dict[str, ToolDescriptor] = {
    "claude": ToolDescriptor(
        key="claude",
        label="Claude Code",
        skill_dir=f".claude/skills/{SKILL_NAME}",
        mcp_config=".mcp.json",
        settings=StructuredSettings(path=".claude/settings.json", key_path=("env",)),
        markers=(".claude",),
        gitignore_entries=(".mcp.json", ".claude/settings.json"),
    ),
    "cursor": ToolDescriptor(
        key="cursor",
        label="Cursor",
        skill_dir=f".cursor/skills/{SKILL_NAME}",
        mcp_config=".cursor/mcp.json",
        settings=FreeformSettings(
            path=".cursor/rules/jira-config.mdc",
            template=CURSOR_RULES_TEMPLATE,
        ),
        markers=(".cursor",),
        gitignore_entries=(".cursor/mcp.json",),
    ),
    "antigravity": ToolDescriptor(
        key="antigravity",
        label="Antigravity (Google)",
        skill_dir=f".agent/skills/{SKILL_NAME}",
        workflow_dir=".agent/workflows",
        workflow_file=f"{SKILL_NAME}.md",
        # The IDE reads MCP servers from a host-level file, not the project.
        mcp_config=".gemini/antigravity/mcp_config.json",
        mcp_scope="home",
        settings=FreeformSettings(
            path=".agent/rules/jira-config.md",
            template=ANTIGRAVITY_RULES_TEMPLATE,
        ),
        markers=(".gemini", ".agent"),
        home_markers=(".gemini/antigravity",),
        gitignore_entries=(".agent/mcp.json", ".agent/settings.json"),
    ),
}


def supported_tools() -> list[str]:
    """All registered tool keys, in registry order."""
    return list(TOOLS)


def get_tool(key: str) -> ToolDescriptor:
    """Look up a descriptor, raising UnknownTool for unregistered keys."""
    try:
        return TOOLS[key]
    except KeyError:
        raise UnknownTool(key, supported_tools()) from None


def resolve_tools(keys) -> list[str]:
    """Validate every key up front and drop duplicates, keeping order."""
    resolved: list[str] = []
    for key in keys:
        get_tool(key)
        if key not in resolved:
            resolved.append(key)
    return resolved


def detect_tools(ctx: Context) -> list[str]:
    """Return the keys of tools whose marker paths exist.

    Only informs; an empty result is never an error.
    """
    detected = []
    for key, tool in TOOLS.items():
        candidates = [ctx.project_root / m for m in tool.markers]
        candidates += [ctx.home / m for m in tool.home_markers]
        if any(p.exists() for p in candidates):
            detected.append(key)
    return detected
