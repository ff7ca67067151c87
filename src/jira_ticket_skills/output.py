"""Terminal output helpers."""

from __future__ import annotations

import click


def styled(text: str, **kwargs) -> str:
    return click.style(text, **kwargs)


def info(msg: str) -> None:
    click.echo(f"  {styled('i', fg='cyan')} {msg}")


def success(msg: str) -> None:
    click.echo(f"  {styled('✓', fg='green')} {msg}")


def warn(msg: str) -> None:
    click.echo(f"  {styled('⚠', fg='yellow')} {msg}")


def heading(msg: str) -> None:
    click.echo(f"\n  {styled(msg, bold=True)}")


def command(cmd: str) -> str:
    """Style a shell command the user may copy."""
    return styled(cmd, fg="cyan")
