"""Install and uninstall flows, one tool at a time in a fixed order."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click

from jira_ticket_skills import output
from jira_ticket_skills.bundle import install_superpowers, print_superpowers_guide
from jira_ticket_skills.config import LogicalConfig
from jira_ticket_skills.tools import SKILL_NAME, Context, get_tool, resolve_tools
from jira_ticket_skills.writers import (
    install_mcp,
    install_settings,
    install_skill,
    uninstall_mcp,
    uninstall_settings,
    uninstall_skill,
    update_gitignore,
)
from jira_ticket_skills.writers.base import MergeOutcome


@dataclass
class ToolResult:
    """What happened for one tool during a run."""

    tool: str
    files: list[Path] = field(default_factory=list)
    mcp: MergeOutcome | None = None
    settings: MergeOutcome | None = None
    superpowers: bool | None = None


@dataclass
class InstallReport:
    tools: list[ToolResult] = field(default_factory=list)
    gitignore_added: list[str] = field(default_factory=list)


@dataclass
class UninstallReport:
    tools: list[ToolResult] = field(default_factory=list)


def _tool_banner(key: str) -> None:
    click.echo(f"\n  {output.styled('─', dim=True)} {output.styled(get_tool(key).label, bold=True)}")


def run_install(ctx: Context, config: LogicalConfig, superpowers: bool = True) -> InstallReport:
    """Install for every selected tool.

    Errors in the skill, MCP or settings steps propagate and stop the run;
    tools already finished keep their changes. The superpowers step handles
    its own failures.
    """
    tools = resolve_tools(config.tools)
    report = InstallReport()

    output.heading("Installing...")
    for key in tools:
        _tool_banner(key)
        result = ToolResult(tool=key)
        result.files = install_skill(ctx, key)
        result.mcp = install_mcp(ctx, key, config)
        result.settings = install_settings(ctx, key, config)
        report.tools.append(result)

    output.heading(".gitignore")
    report.gitignore_added = update_gitignore(ctx, tools)

    if superpowers:
        output.heading("Installing Superpowers")
        for result in report.tools:
            _tool_banner(result.tool)
            result.superpowers = install_superpowers(ctx, result.tool)
    else:
        print_superpowers_guide(tools)

    print_usage_guide(config)
    return report


def run_uninstall(ctx: Context, tools) -> UninstallReport:
    """Remove our files and entries. .gitignore additions are left in place."""
    report = UninstallReport()

    output.heading("Uninstalling...")
    for key in resolve_tools(tools):
        _tool_banner(key)
        result = ToolResult(tool=key)
        result.files = uninstall_skill(ctx, key)
        result.mcp = uninstall_mcp(ctx, key)
        result.settings = uninstall_settings(ctx, key)
        report.tools.append(result)
    return report


def print_usage_guide(config: LogicalConfig) -> None:
    output.heading("Usage")
    output.info("Invoke the skill in your AI tool with:")
    click.echo()
    click.echo(
        f"    {output.command('/' + SKILL_NAME)}            "
        f"{output.styled('List your assigned tickets', dim=True)}"
    )
    click.echo(
        f"    {output.command(f'/{SKILL_NAME} {config.project_key}-123')}  "
        f"{output.styled('Work on a specific ticket', dim=True)}"
    )
