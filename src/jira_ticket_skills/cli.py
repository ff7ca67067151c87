"""CLI interface for jira-ticket-skills."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from jira_ticket_skills import __version__
from jira_ticket_skills.config import check_prerequisites, load_from_env
from jira_ticket_skills.errors import InstallerError
from jira_ticket_skills.installer import run_install, run_uninstall
from jira_ticket_skills.output import heading, info, styled, success
from jira_ticket_skills.prompts import collect_config, prompt_uninstall_tools
from jira_ticket_skills.tools import TOOLS, Context, detect_tools, supported_tools


def current_context() -> Context:
    return Context(project_root=Path.cwd(), home=Path.home())


def print_banner() -> None:
    click.echo()
    click.echo(
        f"  {styled('jira-ticket-skills', fg='cyan', bold=True)} "
        f"{styled('v' + __version__, dim=True)}"
    )
    click.echo(f"  {styled('Install Jira ticket resolution skills for AI coding tools', dim=True)}")


tool_option = click.option(
    "--tool",
    "-t",
    "tool",
    default=None,
    help=f"Force a specific AI tool ({', '.join(supported_tools())}).",
)


@click.group()
@click.version_option(version=__version__, prog_name="jira-ticket-skills")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Install Jira ticket resolution skills for AI coding tools."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="  %(name)s: %(message)s")


@cli.command()
@tool_option
@click.option("--yes", "-y", is_flag=True, help="Non-interactive mode (uses env vars).")
@click.option("--no-figma", is_flag=True, help="Skip Figma integration.")
@click.option("--figma-remote", is_flag=True, help="Add Figma's remote MCP server (--yes mode).")
@click.option("--no-superpowers", is_flag=True, help="Print superpowers instructions instead of installing.")
def install(
    tool: str | None,
    yes: bool,
    no_figma: bool,
    figma_remote: bool,
    no_superpowers: bool,
) -> None:
    """Install the skill, MCP servers and settings.

    \b
    Environment variables for --yes mode:
      JIRA_URL          Jira instance URL
      JIRA_TOKEN        Jira personal/API token
      JIRA_PROJECT_KEY  Default project key (e.g. PRJ)
      TOOL              AI tool: claude | cursor | antigravity
      JIRA_EMAIL        Optional; switches to API token + email auth
    """
    ctx = current_context()
    print_banner()

    runner = check_prerequisites()
    if yes:
        config = load_from_env(
            os.environ,
            tool_override=tool,
            figma_bridge=not no_figma,
            figma_remote=figma_remote and not no_figma,
            jira_runner=runner,
        )
    else:
        config = collect_config(ctx, tool_override=tool, figma=not no_figma, jira_runner=runner)

    try:
        run_install(ctx, config, superpowers=not no_superpowers)
    except OSError as e:
        raise InstallerError(_describe_os_error(e)) from e

    click.echo()
    success(styled("Installation complete!", bold=True))
    click.echo()


@cli.command()
@tool_option
def uninstall(tool: str | None) -> None:
    """Remove the installed skill, MCP servers and settings."""
    ctx = current_context()
    print_banner()

    tools = [tool] if tool else detect_tools(ctx)
    if not tools:
        click.echo()
        tools = prompt_uninstall_tools()
    if not tools:
        info("Nothing to uninstall.")
        return

    try:
        run_uninstall(ctx, tools)
    except OSError as e:
        raise InstallerError(_describe_os_error(e)) from e

    click.echo()
    success(styled("Uninstall complete!", bold=True))
    click.echo()


@cli.command()
def detect() -> None:
    """Show which AI tools are configured in this project."""
    ctx = current_context()
    found = detect_tools(ctx)
    click.echo()
    if not found:
        info("No AI tools detected.")
    for key in found:
        success(f"{TOOLS[key].label} ({key})")
    click.echo()


@cli.command("list-tools")
def list_tools_cmd() -> None:
    """Show supported AI tools and where their files go."""
    heading("Supported tools")
    click.echo()

    for key, tool in TOOLS.items():
        mcp = tool.mcp_config if tool.mcp_scope == "project" else f"~/{tool.mcp_config}"
        click.echo(f"  {styled(key, bold=True)} ({tool.label})")
        click.echo(f"    Skill: {tool.skill_dir}/{tool.skill_file}")
        if tool.workflow_dir and tool.workflow_file:
            click.echo(f"    Workflow: {tool.workflow_dir}/{tool.workflow_file}")
        click.echo(f"    MCP servers: {mcp}")
        click.echo(f"    Settings: {tool.settings.path}")
        click.echo()


def _describe_os_error(e: OSError) -> str:
    if e.filename:
        return f"Could not write {e.filename}: {e.strerror or e}"
    return str(e)
