"""Exception hierarchy for jira-ticket-skills.

Fatal errors inherit from InstallerError, a click.ClickException, so the CLI
prints a single ``Error: ...`` line and exits with status 1.
"""

from __future__ import annotations

import click


class InstallerError(click.ClickException):
    """Base exception for failures that abort the run."""


class UnknownTool(InstallerError):
    """Raised when a tool key is not in the registry."""

    def __init__(self, key: str, supported: list[str] | None = None):
        self.key = key
        message = f"Unknown tool: {key}"
        if supported:
            message += f". Supported: {', '.join(supported)}"
        super().__init__(message)


class ValidationError(InstallerError):
    """Raised for malformed user input or missing required env vars.

    Always raised before any file is written.
    """


class ExternalToolUnavailable(Exception):
    """A helper executable is missing, failed, or timed out.

    Only used inside the superpowers bundle step, which recovers from it
    by printing manual install instructions.
    """
