"""Keep credential-bearing files out of version control."""

from __future__ import annotations

from pathlib import Path

from jira_ticket_skills import output
from jira_ticket_skills.tools import Context, get_tool

GITIGNORE_HEADER = "# jira-ticket-skills (MCP credentials)"


def gitignore_candidates(tools) -> list[str]:
    """Entries the given tools may need ignored, in order, without duplicates."""
    entries: list[str] = []
    for key in tools:
        for entry in get_tool(key).gitignore_entries:
            if entry not in entries:
                entries.append(entry)
    return entries


def update_gitignore(ctx: Context, tools) -> list[str]:
    """Append missing entries under a header comment.

    Existing content is kept byte for byte; lines are never removed or
    reordered. Returns the entries that were added.
    """
    path: Path = ctx.project_root / ".gitignore"
    existing = path.read_bytes() if path.is_file() else b""
    present = {
        line.strip()
        for line in existing.decode("utf-8", errors="surrogateescape").splitlines()
    }

    missing = [e for e in gitignore_candidates(tools) if e not in present]
    if not missing:
        output.success(".gitignore already up to date")
        return []

    block = ("\n".join([GITIGNORE_HEADER, *missing]) + "\n").encode("utf-8")
    if existing:
        if not existing.endswith(b"\n"):
            existing += b"\n"
        block = b"\n" + block

    path.write_bytes(existing + block)
    output.success(f"Added to .gitignore: {', '.join(missing)}")
    return missing
