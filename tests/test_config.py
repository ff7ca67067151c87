"""Tests for config validation and env loading."""

from unittest.mock import patch

import pytest

from jira_ticket_skills.config import (
    check_prerequisites,
    load_from_env,
    normalize_project_key,
    normalize_url,
    validate_email,
    validate_token,
)
from jira_ticket_skills.errors import UnknownTool, ValidationError

ENV = {
    "JIRA_URL": "jira.example.com",
    "JIRA_TOKEN": "tok",
    "JIRA_PROJECT_KEY": "prj",
    "TOOL": "claude",
}


class TestNormalizeUrl:
    def test_bare_hostname_gets_https(self):
        assert normalize_url("jira.example.com") == "https://jira.example.com"

    def test_existing_scheme_kept(self):
        assert normalize_url("http://jira.local:8080") == "http://jira.local:8080"
        assert normalize_url("https://x.atlassian.net") == "https://x.atlassian.net"

    def test_uppercase_scheme_is_lowered(self):
        assert normalize_url("HTTPS://jira.example.com") == "https://jira.example.com"

    def test_host_starting_with_http(self):
        assert normalize_url("httpbin.example.com") == "https://httpbin.example.com"

    def test_other_scheme_fails(self):
        with pytest.raises(ValidationError, match="Invalid Jira URL"):
            normalize_url("ftp://jira.example.com")

    def test_whitespace_trimmed(self):
        assert normalize_url("  jira.example.com \n") == "https://jira.example.com"

    def test_empty_fails(self):
        with pytest.raises(ValidationError, match="required"):
            normalize_url("   ")

    def test_missing_host_fails(self):
        with pytest.raises(ValidationError, match="Invalid Jira URL"):
            normalize_url("https://")


class TestNormalizeProjectKey:
    def test_lowercase_is_uppercased(self):
        assert normalize_project_key("prj") == "PRJ"

    def test_alphanumeric_allowed(self):
        assert normalize_project_key("AB12") == "AB12"

    @pytest.mark.parametrize("bad", ["1AB", "P", "ABCDEFGHIJK", "PR-J", ""])
    def test_invalid_keys(self, bad):
        with pytest.raises(ValidationError):
            normalize_project_key(bad)

    def test_bounds(self):
        assert normalize_project_key("AB") == "AB"
        assert normalize_project_key("ABCDEFGHIJ") == "ABCDEFGHIJ"


class TestSimpleValidators:
    def test_email(self):
        assert validate_email(" dev@example.com ") == "dev@example.com"
        with pytest.raises(ValidationError):
            validate_email("nobody")

    def test_token(self):
        assert validate_token(" t ") == "t"
        with pytest.raises(ValidationError):
            validate_token("")


class TestLoadFromEnv:
    def test_builds_personal_token_config(self):
        config = load_from_env(ENV)
        assert config.tools == ("claude",)
        assert config.jira_url == "https://jira.example.com"
        assert config.jira_token == "tok"
        assert config.project_key == "PRJ"
        assert config.auth_mode == "personal_token"
        assert config.jira_email is None
        assert config.figma_bridge is True
        assert config.figma_remote is False

    @pytest.mark.parametrize("name", ["JIRA_URL", "JIRA_TOKEN", "JIRA_PROJECT_KEY", "TOOL"])
    def test_every_variable_is_required(self, name):
        env = {k: v for k, v in ENV.items() if k != name}
        with pytest.raises(ValidationError, match=name):
            load_from_env(env)

    def test_blank_value_counts_as_missing(self):
        with pytest.raises(ValidationError, match="JIRA_TOKEN"):
            load_from_env({**ENV, "JIRA_TOKEN": "  "})

    def test_tool_override_wins_over_env(self):
        config = load_from_env(ENV, tool_override="cursor")
        assert config.tools == ("cursor",)

    def test_tool_override_satisfies_missing_tool_var(self):
        env = {k: v for k, v in ENV.items() if k != "TOOL"}
        assert load_from_env(env, tool_override="antigravity").tools == ("antigravity",)

    def test_unknown_tool(self):
        with pytest.raises(UnknownTool):
            load_from_env({**ENV, "TOOL": "emacs"})

    def test_invalid_project_key(self):
        with pytest.raises(ValidationError):
            load_from_env({**ENV, "JIRA_PROJECT_KEY": "1AB"})

    def test_email_switches_to_api_token(self):
        config = load_from_env({**ENV, "JIRA_EMAIL": "dev@example.com"})
        assert config.auth_mode == "api_token"
        assert config.jira_email == "dev@example.com"

    def test_figma_flags_and_runner(self):
        config = load_from_env(ENV, figma_bridge=False, figma_remote=True, jira_runner="uv")
        assert config.figma_bridge is False
        assert config.figma_remote is True
        assert config.jira_runner == "uv"


class TestCheckPrerequisites:
    @patch("jira_ticket_skills.config.shutil.which")
    def test_prefers_uvx(self, mock_which):
        mock_which.side_effect = lambda cmd: f"/usr/bin/{cmd}"
        assert check_prerequisites() == "uvx"

    @patch("jira_ticket_skills.config.shutil.which")
    def test_falls_back_to_uv(self, mock_which):
        mock_which.side_effect = lambda cmd: "/usr/bin/uv" if cmd == "uv" else None
        assert check_prerequisites() == "uv"

    @patch("jira_ticket_skills.config.shutil.which", return_value=None)
    def test_missing_runner_only_warns(self, mock_which, capsys):
        assert check_prerequisites() == "uvx"
        assert "uvx not found" in capsys.readouterr().out
