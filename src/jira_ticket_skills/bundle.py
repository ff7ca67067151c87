"""Best-effort install of the third-party superpowers skill bundle.

Every tool has its own side channel (a plugin manager, a package installer,
or a git clone). Nothing here may abort the run: each failure ends in a
printed manual-install instruction.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from jira_ticket_skills import output
from jira_ticket_skills.errors import ExternalToolUnavailable
from jira_ticket_skills.tools import Context, get_tool

logger = logging.getLogger(__name__)

CLAUDE_PLUGIN = "superpowers"
CLAUDE_PLUGIN_ID = "superpowers@superpowers-marketplace"

ANTIGRAVITY_REPO = "https://github.com/anthonylee991/gemini-superpowers-antigravity"
ANTIGRAVITY_TMP = ".agent/.superpowers-tmp"
ANTIGRAVITY_SUBTREES = ("skills", "rules", "workflows")

CHAINED_SKILLS = (
    "brainstorming",
    "systematic-debugging",
    "verification-before-completion",
)

MANUAL_STEPS: dict[str, list[str]] = {
    "claude": ["claude plugin install superpowers"],
    "cursor": [
        "npm install -g prpm && prpm install collections/superpowers",
        "bun add -g openskills && openskills install obra/superpowers "
        "--universal --global && openskills sync",
    ],
    "antigravity": [
        f"git clone {ANTIGRAVITY_REPO}",
        "Copy its .agent/skills/ into your .agent/skills/ directory",
    ],
}


@dataclass(frozen=True)
class Step:
    cmd: tuple[str, ...]
    timeout: int


@dataclass(frozen=True)
class Attempt:
    """One way of installing the bundle; all steps must succeed."""

    label: str
    steps: tuple[Step, ...] = field(default_factory=tuple)


def run_command(cmd, timeout: int, cwd: Path | None = None) -> str:
    """Run a helper executable, raising ExternalToolUnavailable on any failure."""
    if shutil.which(cmd[0]) is None:
        raise ExternalToolUnavailable(f"{cmd[0]} not found")
    try:
        result = subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        raise ExternalToolUnavailable(
            f"{' '.join(cmd)} timed out after {timeout}s"
        ) from None
    except OSError as e:
        raise ExternalToolUnavailable(f"{' '.join(cmd)} failed: {e}") from e
    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip().splitlines()
        reason = detail[-1] if detail else f"exit status {result.returncode}"
        raise ExternalToolUnavailable(f"{' '.join(cmd)} failed: {reason}")
    return result.stdout


def run_attempts(attempts) -> str | None:
    """Try each attempt in order; return the label of the first that succeeds."""
    for attempt in attempts:
        try:
            output.info(f"Installing superpowers via {attempt.label}...")
            for step in attempt.steps:
                run_command(step.cmd, step.timeout)
        except ExternalToolUnavailable as e:
            logger.debug(f"superpowers via {attempt.label}: {e}")
            continue
        return attempt.label
    return None


def print_manual_steps(tool_key: str) -> None:
    for i, step in enumerate(MANUAL_STEPS.get(tool_key, []), 1):
        prefix = f"Option {i}: " if tool_key == "cursor" else ""
        output.info(f"  {prefix}{output.command(step)}")


def install_for_claude() -> bool:
    try:
        listing = run_command(("claude", "plugin", "list"), timeout=15)
    except ExternalToolUnavailable as e:
        # Install anyway; the plugin manager rejects true duplicates itself.
        logger.debug(f"Could not list Claude plugins: {e}")
    else:
        if CLAUDE_PLUGIN_ID in listing:
            output.success("Superpowers already installed (Claude Code)")
            return True

    attempts = [
        Attempt(
            label="claude plugin",
            steps=(Step(("claude", "plugin", "install", CLAUDE_PLUGIN), 60),),
        )
    ]
    if run_attempts(attempts):
        output.success("Superpowers installed (Claude Code)")
        return True
    output.warn("Could not auto-install superpowers for Claude Code")
    print_manual_steps("claude")
    return False


def install_for_cursor() -> bool:
    attempts = [
        Attempt(
            label="prpm",
            steps=(Step(("prpm", "install", "collections/superpowers"), 60),),
        ),
        Attempt(
            label="openskills",
            steps=(
                Step(
                    (
                        "openskills",
                        "install",
                        "obra/superpowers",
                        "--universal",
                        "--global",
                    ),
                    60,
                ),
                Step(("openskills", "sync"), 30),
            ),
        ),
        Attempt(
            label="npx prpm",
            steps=(
                Step(("npx", "-y", "prpm", "install", "collections/superpowers"), 120),
            ),
        ),
    ]
    label = run_attempts(attempts)
    if label:
        output.success(f"Superpowers installed (Cursor via {label})")
        return True
    output.warn("Could not auto-install superpowers for Cursor")
    print_manual_steps("cursor")
    return False


def copy_tree_no_clobber(src: Path, dst: Path) -> list[Path]:
    """Recursively copy src into dst, skipping files that already exist.

    Symlinked directories are not followed.
    """
    dst.mkdir(parents=True, exist_ok=True)
    copied = []
    for item in sorted(src.iterdir()):
        item_dst = dst / item.name
        if item.is_symlink() and item.is_dir():
            logger.debug(f"Skipping symlinked directory {item}")
            continue
        if item.is_dir():
            copied.extend(copy_tree_no_clobber(item, item_dst))
        elif not item_dst.exists():
            shutil.copy2(item, item_dst)
            copied.append(item_dst)
    return copied


def install_for_antigravity(ctx: Context) -> bool:
    agent_dir = ctx.project_root / ".agent"
    tmp = ctx.project_root / ANTIGRAVITY_TMP
    if tmp.exists():
        shutil.rmtree(tmp, ignore_errors=True)

    try:
        output.info("Cloning superpowers for Antigravity...")
        run_command(
            ("git", "clone", "--depth=1", f"{ANTIGRAVITY_REPO}.git", str(tmp)),
            timeout=60,
        )

        copied_any = False
        for name in ANTIGRAVITY_SUBTREES:
            src = tmp / ".agent" / name
            if not src.is_dir():
                continue
            copy_tree_no_clobber(src, agent_dir / name)
            output.success(f"Superpowers {name} copied to .agent/{name}/")
            copied_any = True

        if not copied_any:
            output.warn("Cloned repo but no .agent/ directory found")
        return copied_any
    except (ExternalToolUnavailable, OSError) as e:
        output.warn(f"Could not auto-install superpowers for Antigravity: {e}")
        print_manual_steps("antigravity")
        return False
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


def install_superpowers(ctx: Context, tool_key: str) -> bool:
    """Install the bundle for one tool. Never raises for tool failures."""
    if tool_key == "claude":
        return install_for_claude()
    if tool_key == "cursor":
        return install_for_cursor()
    if tool_key == "antigravity":
        return install_for_antigravity(ctx)
    output.warn(f"Superpowers auto-install not supported for: {tool_key}")
    return False


def print_superpowers_guide(tools) -> None:
    """Manual instructions, shown when auto-install is skipped."""
    output.heading("Recommended: Install Superpowers")
    output.info("The resolve-jira-ticket skill chains these superpowers skills:")
    for name in CHAINED_SKILLS:
        output.info(f"  - {name}")
    for key in tools:
        if key in MANUAL_STEPS:
            output.heading(f"{get_tool(key).label}:")
            print_manual_steps(key)
