"""
Tests for settings resolution — layer priority, booleans, defaults.
"""

from pathlib import Path

import pytest

from repo_sync.config.settings import (
    HostConfig,
    SyncSettings,
    input_env_name,
    resolve_repo_list_file,
    runner_input_name,
)
from repo_sync.mirror.errors import ConfigError

TOKENS = {"SOURCE_GITHUB_TOKEN": "s", "TARGET_GITHUB_TOKEN": "t"}


def _resolve(options=None, **env) -> SyncSettings:
    environ = dict(TOKENS)
    environ.update(env)
    return SyncSettings.resolve(options or {}, environ=environ)


class TestNames:

    def test_runner_input_keeps_hyphens(self):
        assert runner_input_name("repo-list-file") == "INPUT_REPO-LIST-FILE"

    def test_input_env_uses_underscores(self):
        assert input_env_name("repo-list-file") == "INPUT_REPO_LIST_FILE"


class TestPriority:

    def test_defaults(self):
        settings = _resolve()

        assert settings.repo_list_file == Path("actions-list.yml")
        assert settings.source.api_url == "https://api.github.com"
        assert settings.target.api_url == "https://api.github.com"
        assert settings.source.web_url == "https://github.com"
        assert settings.overwrite_visibility is False
        assert settings.force_push is False

    def test_runner_input_beats_everything(self):
        env = {
            "INPUT_REPO-LIST-FILE": "runner.yml",
            "INPUT_REPO_LIST_FILE": "input.yml",
            "REPO_LIST_FILE": "plain.yml",
        }
        settings = _resolve({"repo-list-file": "flag.yml"}, **env)
        assert settings.repo_list_file == Path("runner.yml")

    def test_input_env_beats_flag(self):
        settings = _resolve(
            {"repo-list-file": "flag.yml"},
            INPUT_REPO_LIST_FILE="input.yml",
            REPO_LIST_FILE="plain.yml",
        )
        assert settings.repo_list_file == Path("input.yml")

    def test_flag_beats_plain_env(self):
        settings = _resolve({"repo-list-file": "flag.yml"}, REPO_LIST_FILE="plain.yml")
        assert settings.repo_list_file == Path("flag.yml")

    def test_plain_env_beats_default(self):
        settings = _resolve(REPO_LIST_FILE="plain.yml")
        assert settings.repo_list_file == Path("plain.yml")

    def test_empty_values_are_skipped(self):
        settings = _resolve({"repo-list-file": ""}, INPUT_REPO_LIST_FILE="  ", REPO_LIST_FILE="plain.yml")
        assert settings.repo_list_file == Path("plain.yml")

    def test_target_api_url_defaults_to_source(self):
        settings = _resolve(SOURCE_GITHUB_API_URL="https://ghes.corp.com/api/v3")

        assert settings.target.api_url == "https://ghes.corp.com/api/v3"
        assert settings.target.web_url == "https://ghes.corp.com"

    def test_target_api_url_from_plain_env(self):
        settings = _resolve(TARGET_GITHUB_API_URL="https://api.acme.ghe.com")

        assert settings.source.web_url == "https://github.com"
        assert settings.target.web_url == "https://acme.ghe.com"

    def test_tokens_from_runner_inputs(self):
        settings = SyncSettings.resolve({}, environ={
            "INPUT_SOURCE-GITHUB-TOKEN": "runner-s",
            "INPUT_TARGET_GITHUB_TOKEN": "input-t",
        })
        assert settings.source.token == "runner-s"
        assert settings.target.token == "input-t"
        assert settings.same_token is False


class TestFlags:

    @pytest.mark.parametrize("value", ["true", "True", "TRUE"])
    def test_runner_booleans(self, value):
        assert _resolve(**{"INPUT_FORCE-PUSH": value}).force_push is True

    @pytest.mark.parametrize("value", ["yes", "1", "on", "false"])
    def test_runner_rejects_non_yaml_booleans(self, value):
        assert _resolve(**{"INPUT_FORCE-PUSH": value}).force_push is False

    def test_input_env_true(self):
        assert _resolve(INPUT_OVERWRITE_REPO_VISIBILITY="true").overwrite_visibility is True

    def test_flag(self):
        assert _resolve({"force-push": True}).force_push is True

    def test_plain_env(self):
        assert _resolve(FORCE_PUSH="yes").force_push is True

    def test_any_layer_switches_on(self):
        settings = _resolve({"force-push": True}, **{"INPUT_FORCE-PUSH": "false"})
        assert settings.force_push is True


class TestTokens:

    def test_missing_source_token(self):
        with pytest.raises(ConfigError, match="SOURCE_GITHUB_TOKEN"):
            SyncSettings.resolve({}, environ={"TARGET_GITHUB_TOKEN": "t"})

    def test_missing_target_token(self):
        with pytest.raises(ConfigError, match="TARGET_GITHUB_TOKEN"):
            SyncSettings.resolve({"source-github-token": "s"}, environ={})

    def test_describe_never_shows_tokens(self):
        settings = SyncSettings.resolve(
            {}, environ={"SOURCE_GITHUB_TOKEN": "ghp_aaa", "TARGET_GITHUB_TOKEN": "ghp_aaa"},
        )
        text = "\n".join(settings.describe())

        assert "ghp_aaa" not in text
        assert "same token for source and target" in text


class TestHostConfig:

    def test_web_url_is_derived(self):
        host = HostConfig(token="x", api_url="https://api.example.com:8080/api")
        assert host.web_url == "https://example.com:8080"

    def test_repo_list_file_without_tokens(self):
        assert resolve_repo_list_file({"repo-list-file": "a.yml"}, environ={}) == Path("a.yml")
