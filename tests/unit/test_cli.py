"""Unit tests for the dstl command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from distillery.__main__ import main
from distillery.config import DistilleryConfig
from distillery.core.startup import DirectPrStart, PrPickerStart, RepoSelectorStart
from distillery.paths import get_config_path

pytestmark = pytest.mark.unit


class FakeApp:
    launched: list[FakeApp] = []

    def __init__(self, config, startup, executor=None, log_file=None):
        self.config = config
        self.startup = startup
        self.log_file = log_file

    def run(self):
        FakeApp.launched.append(self)


@pytest.fixture
def fake_app(monkeypatch):
    FakeApp.launched = []
    monkeypatch.setattr("distillery.tui.app.DistilleryApp", FakeApp)
    monkeypatch.setattr("distillery.__main__.load_dotenv", lambda: False)
    return FakeApp


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("DISTILLERY_CONFIG_DIR", str(tmp_path / "config"))
    return tmp_path / "config" / "config.toml"


class TestMain:
    def test_missing_api_key_exits_with_error(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        result = CliRunner().invoke(main, ["acme/widgets#1"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY" in result.output
        assert fake_app.launched == []

    def test_direct_pr(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        result = CliRunner().invoke(main, ["acme/widgets#42", "--cache", "-m", "gpt-test"])

        assert result.exit_code == 0, result.output
        app = fake_app.launched[0]
        assert app.startup == DirectPrStart("acme", "widgets", 42)
        assert app.config.model == "gpt-test"
        assert app.config.use_cache is True
        assert app.config.api_key == "sk-test"

    def test_repo_option_and_no_arguments(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        CliRunner().invoke(main, ["-R", "acme/widgets"])
        CliRunner().invoke(main, [])

        assert [app.startup for app in fake_app.launched] == [
            PrPickerStart("acme", "widgets"),
            RepoSelectorStart(),
        ]

    def test_invalid_reference_is_a_usage_error(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        result = CliRunner().invoke(main, ["acme/widgets#abc"])

        assert result.exit_code == 2
        assert "Invalid PR reference" in result.output

    def test_remember_saves_defaults(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        result = CliRunner().invoke(
            main, ["acme/widgets#1", "-m", "gpt-saved", "--cache-file", "s.json", "--remember"]
        )

        assert result.exit_code == 0, result.output
        assert get_config_path() == isolated_config
        saved = DistilleryConfig.load(isolated_config)
        assert saved.general.model == "gpt-saved"
        assert saved.general.cache_file == "s.json"

    def test_config_file_supplies_defaults(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('[general]\nmodel = "gpt-file"\n', encoding="utf-8")

        CliRunner().invoke(main, ["acme/widgets#1"])

        assert fake_app.launched[0].config.model == "gpt-file"

    def test_broken_config_file_is_ignored(self, fake_app, isolated_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("[general\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["acme/widgets#1"])

        assert result.exit_code == 0
        assert "Ignoring invalid config file" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "dstl" in result.output
