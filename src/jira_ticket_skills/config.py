"""The user's Jira configuration and its validation rules."""

from __future__ import annotations

import os
import re
import shutil
from dataclasses import dataclass
from typing import Literal, Mapping
from urllib.parse import urlparse

from jira_ticket_skills import output
from jira_ticket_skills.errors import ValidationError
from jira_ticket_skills.tools import resolve_tools

AuthMode = Literal["personal_token", "api_token"]
Runner = Literal["uvx", "uv"]

PROJECT_KEY_RE = re.compile(r"^[A-Z][A-Z0-9]{1,9}$")
SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.-]*)://", re.IGNORECASE)

ENV_URL = "JIRA_URL"
ENV_TOKEN = "JIRA_TOKEN"
ENV_PROJECT_KEY = "JIRA_PROJECT_KEY"
ENV_EMAIL = "JIRA_EMAIL"
ENV_TOOL = "TOOL"


@dataclass(frozen=True)
class LogicalConfig:
    """What the user asked for, independent of any tool's file layout.

    Never persisted; only its projection into each tool's files is.
    """

    tools: tuple[str, ...]
    jira_url: str
    jira_token: str
    project_key: str
    auth_mode: AuthMode = "personal_token"
    jira_email: str | None = None
    jira_runner: Runner = "uvx"
    figma_bridge: bool = False
    figma_remote: bool = False


def normalize_url(raw: str) -> str:
    """Trim and ensure a scheme, e.g. ``jira.example.com`` -> ``https://jira.example.com``."""
    value = (raw or "").strip()
    if not value:
        raise ValidationError("Jira URL is required")
    scheme = SCHEME_RE.match(value)
    if scheme:
        value = scheme.group(1).lower() + value[scheme.end(1):]
    else:
        value = f"https://{value}"
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid Jira URL: {raw}")
    return value


def normalize_project_key(raw: str) -> str:
    value = (raw or "").strip().upper()
    if not PROJECT_KEY_RE.match(value):
        raise ValidationError(
            f"Invalid project key '{raw}': must be 2-10 uppercase letters/numbers, "
            "starting with a letter"
        )
    return value


def validate_email(raw: str) -> str:
    value = (raw or "").strip()
    if "@" not in value:
        raise ValidationError(f"Invalid email: {raw}")
    return value


def validate_token(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("Jira token is required")
    return value


def check_prerequisites() -> Runner:
    """Pick the runner for the Jira MCP server (mcp-atlassian).

    Prefers ``uvx``; falls back to ``uv tool run``. A missing runner is only
    a warning since the config still works once uv is installed.
    """
    output.heading("Checking prerequisites...")

    if shutil.which("uvx"):
        output.success("uvx found")
        return "uvx"

    if shutil.which("uv"):
        output.success('uv found (will use "uv tool run" instead of uvx)')
        return "uv"

    output.warn("uvx not found. Required for Jira MCP server (mcp-atlassian).")
    if os.name == "nt":
        output.info(
            f"Install: {output.command('pip install uv')} or "
            f"{output.command('winget install astral-sh.uv')}"
        )
    else:
        output.info(
            f"Install: {output.command('pip install uv')} or "
            f"{output.command('brew install uv')}"
        )
    return "uvx"


def load_from_env(
    environ: Mapping[str, str],
    tool_override: str | None = None,
    figma_bridge: bool = True,
    figma_remote: bool = False,
    jira_runner: Runner = "uvx",
) -> LogicalConfig:
    """Build the config for non-interactive (``--yes``) mode.

    Every required variable is checked before anything is written.
    """

    def required(name: str) -> str:
        value = (environ.get(name) or "").strip()
        if not value:
            raise ValidationError(f"{name} env var is required in --yes mode")
        return value

    url = normalize_url(required(ENV_URL))
    token = required(ENV_TOKEN)
    project_key = normalize_project_key(required(ENV_PROJECT_KEY))

    tool = (tool_override or "").strip() or required(ENV_TOOL)
    tools = resolve_tools([tool])

    email = (environ.get(ENV_EMAIL) or "").strip()
    if email:
        return LogicalConfig(
            tools=tuple(tools),
            jira_url=url,
            jira_token=token,
            project_key=project_key,
            auth_mode="api_token",
            jira_email=validate_email(email),
            jira_runner=jira_runner,
            figma_bridge=figma_bridge,
            figma_remote=figma_remote,
        )

    return LogicalConfig(
        tools=tuple(tools),
        jira_url=url,
        jira_token=token,
        project_key=project_key,
        jira_runner=jira_runner,
        figma_bridge=figma_bridge,
        figma_remote=figma_remote,
    )
