"""Copy the skill (and workflow) templates into a tool's directories."""

from __future__ import annotations

import shutil
from pathlib import Path

from jira_ticket_skills import output
from jira_ticket_skills.tools import SKILL_NAME, Context, get_tool
from jira_ticket_skills.writers.base import remove_dir_if_empty, remove_file

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / SKILL_NAME
SKILL_TEMPLATE = TEMPLATE_DIR / "SKILL.md"
WORKFLOW_TEMPLATE = TEMPLATE_DIR / "workflow.md"


def _copy_template(ctx: Context, src: Path, dst: Path, kind: str) -> Path:
    """Skills are monolithic documents: overwrite, never merge."""
    if dst.exists():
        output.warn(f"{kind} already exists: {ctx.display(dst)} (overwriting)")
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    output.success(f"Installed {kind.lower()}: {ctx.display(dst)}")
    return dst


def install_skill(ctx: Context, tool_key: str) -> list[Path]:
    """Install SKILL.md, plus the workflow file for tools that use one."""
    tool = get_tool(tool_key)
    installed = [_copy_template(ctx, SKILL_TEMPLATE, tool.skill_path(ctx), "Skill")]

    workflow = tool.workflow_path(ctx)
    if workflow is not None:
        installed.append(_copy_template(ctx, WORKFLOW_TEMPLATE, workflow, "Workflow"))
    return installed


def uninstall_skill(ctx: Context, tool_key: str) -> list[Path]:
    tool = get_tool(tool_key)
    removed = []

    skill = tool.skill_path(ctx)
    if remove_file(skill):
        removed.append(skill)
        output.success(f"Removed: {ctx.display(skill)}")
        # Other files may share the skill directory.
        remove_dir_if_empty(tool.skill_dir_path(ctx))
    else:
        output.info(f"Skill not found: {ctx.display(skill)}")

    workflow = tool.workflow_path(ctx)
    if workflow is not None and remove_file(workflow):
        removed.append(workflow)
        output.success(f"Removed: {ctx.display(workflow)}")
    return removed
