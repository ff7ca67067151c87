"""Interactive collection of the Jira configuration."""

from __future__ import annotations

import os

import click

from jira_ticket_skills import output
from jira_ticket_skills.config import (
    ENV_PROJECT_KEY,
    ENV_URL,
    LogicalConfig,
    Runner,
    normalize_project_key,
    normalize_url,
    validate_email,
    validate_token,
)
from jira_ticket_skills.errors import ValidationError
from jira_ticket_skills.tools import TOOLS, Context, detect_tools, resolve_tools

AUTH_CHOICES = [
    ("personal_token", "Personal Token (Server/DC)"),
    ("api_token", "API Token + Email (Cloud)"),
]


def _validated(fn):
    """Adapt a config validator for click.prompt so bad input is re-asked."""

    def proc(value):
        try:
            return fn(value)
        except ValidationError as e:
            raise click.BadParameter(e.message) from None

    return proc


def parse_tool_selection(raw: str, keys: list[str]) -> list[str]:
    """Turn ``"1,3"`` into the matching tool keys."""
    selected = []
    for part in raw.replace(" ", "").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= len(keys):
            raise ValidationError(f"Invalid choice: {part}")
        key = keys[int(part) - 1]
        if key not in selected:
            selected.append(key)
    if not selected:
        raise ValidationError("Select at least one tool")
    return selected


def select_tools(title: str, detected: list[str]) -> list[str]:
    """Numbered multi-select; detected tools are the default answer."""
    keys = list(TOOLS)
    output.heading(title)
    for i, key in enumerate(keys, 1):
        mark = " (detected)" if key in detected else ""
        output.info(f"{i}. {TOOLS[key].label}{mark}")

    default = ",".join(str(keys.index(k) + 1) for k in detected) or "1"
    return click.prompt(
        "  Choices (comma-separated)",
        default=default,
        value_proc=_validated(lambda v: parse_tool_selection(v, keys)),
    )


def prompt_tools(ctx: Context, tool_override: str | None) -> list[str]:
    if tool_override:
        return resolve_tools([tool_override])
    return select_tools("Install for which AI tools?", detect_tools(ctx))


def prompt_uninstall_tools() -> list[str]:
    """Asked only when detection found nothing and no tool was forced."""
    output.info("No AI tool configuration detected.")
    if not click.confirm("  Choose tools to uninstall from anyway?", default=False):
        return []
    return select_tools("Uninstall from which AI tools?", [])


def collect_config(
    ctx: Context,
    tool_override: str | None = None,
    figma: bool = True,
    jira_runner: Runner = "uvx",
) -> LogicalConfig:
    """Ask every question and return the resulting config.

    Ctrl-C raises click.Abort, which cancels the whole run.
    """
    tools = prompt_tools(ctx, tool_override)

    output.heading("Jira Configuration")
    jira_url = click.prompt(
        "  Jira instance URL",
        default=os.environ.get(ENV_URL) or None,
        value_proc=_validated(normalize_url),
    )

    for i, (_, title) in enumerate(AUTH_CHOICES, 1):
        output.info(f"{i}. {title}")
    auth_index = click.prompt(
        "  Jira authentication method",
        type=click.IntRange(1, len(AUTH_CHOICES)),
        default=1,
    )
    auth_mode = AUTH_CHOICES[auth_index - 1][0]

    jira_email = None
    if auth_mode == "api_token":
        jira_email = click.prompt(
            "  Jira account email", value_proc=_validated(validate_email)
        )

    token_label = "Jira Personal Token" if auth_mode == "personal_token" else "Jira API Token"
    jira_token = click.prompt(
        f"  {token_label}", hide_input=True, value_proc=_validated(validate_token)
    )

    project_key = click.prompt(
        "  Default Jira project key (e.g. PRJ)",
        default=os.environ.get(ENV_PROJECT_KEY) or None,
        value_proc=_validated(normalize_project_key),
    )

    figma_bridge = False
    figma_remote = False
    if figma:
        output.heading("Figma Integration")
        figma_bridge = click.confirm(
            "  Install Figma Bridge (connects to Figma desktop app for live design context)?",
            default=True,
        )
        figma_remote = click.confirm(
            "  Add Figma's remote MCP server (https://mcp.figma.com/mcp)?",
            default=False,
        )

    return LogicalConfig(
        tools=tuple(tools),
        jira_url=jira_url,
        jira_token=jira_token,
        project_key=project_key,
        auth_mode=auth_mode,
        jira_email=jira_email,
        jira_runner=jira_runner,
        figma_bridge=figma_bridge,
        figma_remote=figma_remote,
    )
