"""Write the default project key into a tool's settings store."""

from __future__ import annotations

from pathlib import Path

from jira_ticket_skills import output
from jira_ticket_skills.config import LogicalConfig
from jira_ticket_skills.tools import (
    PROJECT_KEY_FIELD,
    Context,
    FreeformSettings,
    StructuredSettings,
    get_tool,
)
from jira_ticket_skills.writers.base import (
    MergeOutcome,
    read_json,
    remove_file,
    write_json,
    write_text,
)


def render_rules(settings: FreeformSettings, project_key: str) -> str:
    return settings.template.format(project_key=project_key)


def install_settings(ctx: Context, tool_key: str, config: LogicalConfig) -> MergeOutcome:
    tool = get_tool(tool_key)
    path = tool.settings_path(ctx)
    settings = tool.settings

    if isinstance(settings, StructuredSettings):
        outcome = _install_structured(path, settings, config.project_key)
    else:
        write_text(path, render_rules(settings, config.project_key))
        outcome = MergeOutcome(path=path, updated=[path.name])

    output.success(f"Set {PROJECT_KEY_FIELD}={config.project_key} in {ctx.display(path)}")
    return outcome


def _install_structured(path: Path, settings: StructuredSettings, project_key: str) -> MergeOutcome:
    data = read_json(path) or {}
    outcome = MergeOutcome(path=path)

    target = data
    for key in settings.key_path:
        if not isinstance(target.get(key), dict):
            target[key] = {}
        target = target[key]

    if PROJECT_KEY_FIELD in target:
        outcome.updated.append(PROJECT_KEY_FIELD)
    else:
        outcome.added.append(PROJECT_KEY_FIELD)
    target[PROJECT_KEY_FIELD] = project_key

    write_json(path, data)
    return outcome


def uninstall_settings(ctx: Context, tool_key: str) -> MergeOutcome:
    tool = get_tool(tool_key)
    path = tool.settings_path(ctx)
    settings = tool.settings

    if isinstance(settings, StructuredSettings):
        return _uninstall_structured(ctx, path, settings)

    outcome = MergeOutcome(path=path)
    if remove_file(path):
        outcome.removed.append(path.name)
        output.success(f"Removed: {ctx.display(path)}")
    else:
        output.info(f"Rules file not found: {ctx.display(path)}")
    return outcome


def _uninstall_structured(ctx: Context, path: Path, settings: StructuredSettings) -> MergeOutcome:
    """Delete only the project key field; parent objects stay, even if empty."""
    outcome = MergeOutcome(path=path)
    data = read_json(path)
    if data is None:
        output.info("No settings file found")
        return outcome

    target = data
    for key in settings.key_path:
        target = target.get(key)
        if not isinstance(target, dict):
            output.info(f"No {PROJECT_KEY_FIELD} in {ctx.display(path)}")
            return outcome

    if PROJECT_KEY_FIELD not in target:
        output.info(f"No {PROJECT_KEY_FIELD} in {ctx.display(path)}")
        return outcome

    del target[PROJECT_KEY_FIELD]
    outcome.removed.append(PROJECT_KEY_FIELD)
    write_json(path, data)
    output.success(f"Removed {PROJECT_KEY_FIELD} from {ctx.display(path)}")
    return outcome
