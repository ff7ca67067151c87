"""Merge the Jira and Figma MCP server definitions into a tool's MCP file."""

from __future__ import annotations

from typing import Any

from jira_ticket_skills import output
from jira_ticket_skills.config import LogicalConfig
from jira_ticket_skills.tools import Context, get_tool
from jira_ticket_skills.writers.base import MergeOutcome, read_json, write_json

JIRA_SERVER = "jira"
FIGMA_BRIDGE_SERVER = "figma-bridge"
FIGMA_REMOTE_SERVER = "figma"

# Every name this installer may create; uninstall removes only these.
OWNED_SERVERS = (JIRA_SERVER, FIGMA_BRIDGE_SERVER, FIGMA_REMOTE_SERVER)

FIGMA_REMOTE_URL = "https://mcp.figma.com/mcp"


def build_servers(config: LogicalConfig) -> dict[str, dict[str, Any]]:
    """Server definitions for this config, keyed by their fixed names."""
    env = {"JIRA_URL": config.jira_url}
    if config.auth_mode == "api_token":
        env["JIRA_API_TOKEN"] = config.jira_token
        env["JIRA_USERNAME"] = config.jira_email or ""
    else:
        env["JIRA_PERSONAL_TOKEN"] = config.jira_token

    servers: dict[str, dict[str, Any]] = {}
    if config.jira_runner == "uv":
        servers[JIRA_SERVER] = {
            "command": "uv",
            "args": ["tool", "run", "mcp-atlassian"],
            "env": env,
        }
    else:
        servers[JIRA_SERVER] = {
            "command": "uvx",
            "args": ["mcp-atlassian"],
            "env": env,
        }

    if config.figma_bridge:
        servers[FIGMA_BRIDGE_SERVER] = {
            "command": "npx",
            "args": ["-y", "@gethopp/figma-mcp-bridge"],
        }

    if config.figma_remote:
        servers[FIGMA_REMOTE_SERVER] = {"type": "http", "url": FIGMA_REMOTE_URL}

    return servers


def install_mcp(ctx: Context, tool_key: str, config: LogicalConfig) -> MergeOutcome:
    """Add or overwrite our servers; every other entry is left as-is.

    A missing or corrupt file starts from an empty object.
    """
    tool = get_tool(tool_key)
    path = tool.mcp_config_path(ctx)

    data = read_json(path) or {}
    existing = data.get(tool.mcp_key)
    if not isinstance(existing, dict):
        existing = {}

    outcome = MergeOutcome(path=path)
    new_servers = build_servers(config)
    for name, definition in new_servers.items():
        if name in existing:
            outcome.updated.append(name)
        else:
            outcome.added.append(name)
        existing[name] = definition
    outcome.skipped = [name for name in existing if name not in new_servers]

    data[tool.mcp_key] = existing
    write_json(path, data)

    shown = ctx.display(path)
    if outcome.added:
        output.success(f"Added MCP servers to {shown}: {', '.join(outcome.added)}")
    if outcome.updated:
        output.success(f"Updated MCP servers in {shown}: {', '.join(outcome.updated)}")
    return outcome


def uninstall_mcp(ctx: Context, tool_key: str) -> MergeOutcome:
    """Remove only the server names this installer owns."""
    tool = get_tool(tool_key)
    path = tool.mcp_config_path(ctx)
    outcome = MergeOutcome(path=path)

    data = read_json(path)
    servers = data.get(tool.mcp_key) if data else None
    if not isinstance(servers, dict):
        output.info("No MCP config found")
        return outcome

    for name in OWNED_SERVERS:
        if name in servers:
            del servers[name]
            outcome.removed.append(name)
    outcome.skipped = list(servers)

    if not outcome.removed:
        output.info("No MCP servers to remove")
        return outcome

    write_json(path, data)
    output.success(
        f"Removed MCP servers from {ctx.display(path)}: {', '.join(outcome.removed)}"
    )
    return outcome
