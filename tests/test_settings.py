"""Tests for the settings writer."""

import json

import pytest

from jira_ticket_skills.errors import UnknownTool
from jira_ticket_skills.writers.settings import install_settings, uninstall_settings


def read(path):
    return json.loads(path.read_text())


class TestStructuredSettings:
    def test_creates_file_and_parents(self, ctx, sample_config):
        outcome = install_settings(ctx, "claude", sample_config)
        path = ctx.project_root / ".claude" / "settings.json"
        assert read(path) == {"env": {"JIRA_PROJECT_KEY": "PRJ"}}
        assert outcome.added == ["JIRA_PROJECT_KEY"]

    def test_preserves_siblings(self, ctx, sample_config):
        path = ctx.project_root / ".claude" / "settings.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"permissions": {"allow": ["Bash"]}, "env": {"FOO": "bar"}}))

        install_settings(ctx, "claude", sample_config)
        assert read(path) == {
            "permissions": {"allow": ["Bash"]},
            "env": {"FOO": "bar", "JIRA_PROJECT_KEY": "PRJ"},
        }

    def test_second_install_updates(self, ctx, sample_config):
        install_settings(ctx, "claude", sample_config)
        outcome = install_settings(ctx, "claude", sample_config)
        assert outcome.updated == ["JIRA_PROJECT_KEY"]
        assert read(ctx.project_root / ".claude" / "settings.json") == {
            "env": {"JIRA_PROJECT_KEY": "PRJ"}
        }

    def test_uninstall_removes_only_field(self, ctx, sample_config):
        path = ctx.project_root / ".claude" / "settings.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"env": {"FOO": "bar"}, "model": "opus"}))
        install_settings(ctx, "claude", sample_config)

        outcome = uninstall_settings(ctx, "claude")
        assert outcome.removed == ["JIRA_PROJECT_KEY"]
        assert read(path) == {"env": {"FOO": "bar"}, "model": "opus"}

    def test_uninstall_keeps_empty_parent(self, ctx, sample_config):
        install_settings(ctx, "claude", sample_config)
        uninstall_settings(ctx, "claude")
        assert read(ctx.project_root / ".claude" / "settings.json") == {"env": {}}

    def test_uninstall_without_file(self, ctx, capsys):
        outcome = uninstall_settings(ctx, "claude")
        assert outcome.removed == []
        assert "No settings file found" in capsys.readouterr().out
        assert not (ctx.project_root / ".claude").exists()

    def test_uninstall_without_field_does_not_rewrite(self, ctx):
        path = ctx.project_root / ".claude" / "settings.json"
        path.parent.mkdir()
        path.write_text('{"model": "opus"}')
        outcome = uninstall_settings(ctx, "claude")
        assert outcome.removed == []
        assert path.read_text() == '{"model": "opus"}'


class TestFreeformSettings:
    def test_cursor_rules_document(self, ctx, cloud_config):
        install_settings(ctx, "cursor", cloud_config)
        text = (ctx.project_root / ".cursor" / "rules" / "jira-config.mdc").read_text()
        assert text.startswith("---\n")
        assert "alwaysApply: true" in text
        assert "# Jira Configuration" in text
        assert "`WEB`" in text

    def test_antigravity_rules_document(self, ctx, sample_config):
        install_settings(ctx, "antigravity", sample_config)
        text = (ctx.project_root / ".agent" / "rules" / "jira-config.md").read_text()
        assert "trigger: always_on" in text
        assert "`PRJ`" in text

    def test_overwrites_whole_file(self, ctx, cloud_config):
        path = ctx.project_root / ".cursor" / "rules" / "jira-config.mdc"
        path.parent.mkdir(parents=True)
        path.write_text("hand edits\n")
        install_settings(ctx, "cursor", cloud_config)
        assert "hand edits" not in path.read_text()

    def test_uninstall_deletes_file(self, ctx, cloud_config):
        install_settings(ctx, "cursor", cloud_config)
        outcome = uninstall_settings(ctx, "cursor")
        assert outcome.removed == ["jira-config.mdc"]
        assert not (ctx.project_root / ".cursor" / "rules" / "jira-config.mdc").exists()

    def test_uninstall_missing_file_is_info(self, ctx, capsys):
        outcome = uninstall_settings(ctx, "cursor")
        assert outcome.removed == []
        assert "Rules file not found" in capsys.readouterr().out


class TestUnknownTool:
    def test_install_raises_and_writes_nothing(self, ctx, sample_config, snapshot):
        with pytest.raises(UnknownTool):
            install_settings(ctx, "zed", sample_config)
        assert snapshot(ctx.project_root) == {}
