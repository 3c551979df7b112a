"""Tests for configuration loading and validation."""

import pytest
import yaml
from pydantic import ValidationError

from docquery.config import (
    DocQueryConfig,
    LoggingConfig,
    SearchConfig,
    load_config,
    resolve_env_vars,
)
from docquery.models.filter_expr import NormalizeOptions


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))
    return path


class TestDefaults:
    """Defaults used when no config file exists."""

    def test_defaults(self):
        cfg = DocQueryConfig()
        assert cfg.search.no_regex is False
        assert cfg.search.match_from_start is False
        assert cfg.sort.locale == "en"
        assert cfg.sort.fields == {}
        assert cfg.text_search.fields == []
        assert cfg.logging.level == "warning"

    def test_search_to_options(self):
        options = SearchConfig(no_regex=True).to_options()
        assert options == NormalizeOptions(no_regex=True, match_from_start=False)

    def test_log_level_normalized(self):
        assert LoggingConfig(level="DEBUG").level == "debug"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="loud")


class TestResolveEnvVars:
    """${VAR} substitution."""

    def test_resolves(self, monkeypatch):
        monkeypatch.setenv("DQ_LOCALE", "de")
        assert resolve_env_vars("${DQ_LOCALE}-x") == "de-x"

    def test_missing_is_empty(self, monkeypatch):
        monkeypatch.delenv("DQ_MISSING", raising=False)
        assert resolve_env_vars("a${DQ_MISSING}b") == "ab"


class TestLoadConfig:
    """File lookup, parsing and environment overrides."""

    def test_no_file_gives_defaults(self, isolated_config):
        assert load_config() == DocQueryConfig()

    def test_cwd_file(self, isolated_config):
        _write(
            isolated_config / "docquery.yaml",
            {
                "sort": {"locale": "de", "fields": {"name": {"langMap": True}}},
                "text_search": {"fields": ["title", "desc"]},
            },
        )
        cfg = load_config()
        assert cfg.sort.locale == "de"
        assert cfg.sort.fields["name"].is_multi_language
        assert cfg.text_search.fields == ["title", "desc"]

    def test_home_file(self, isolated_config):
        _write(isolated_config / ".docquery" / "config.yaml", {"search": {"no_regex": True}})
        assert load_config().search.no_regex is True

    def test_cwd_wins_over_home(self, isolated_config):
        _write(isolated_config / ".docquery" / "config.yaml", {"sort": {"locale": "fr"}})
        _write(isolated_config / "docquery.yml", {"sort": {"locale": "it"}})
        assert load_config().sort.locale == "it"

    def test_explicit_path(self, isolated_config):
        path = _write(isolated_config / "custom.yaml", {"logging": {"level": "INFO"}})
        assert load_config(str(path)).logging.level == "info"

    def test_explicit_path_missing(self, isolated_config):
        with pytest.raises(FileNotFoundError):
            load_config(str(isolated_config / "nope.yaml"))

    def test_empty_file(self, isolated_config):
        (isolated_config / "docquery.yaml").write_text("")
        assert load_config() == DocQueryConfig()

    def test_env_var_reference(self, isolated_config, monkeypatch):
        monkeypatch.setenv("DQ_LOCALE", "pt")
        _write(isolated_config / "docquery.yaml", {"sort": {"locale": "${DQ_LOCALE}"}})
        assert load_config().sort.locale == "pt"

    def test_env_overrides(self, isolated_config, monkeypatch):
        _write(isolated_config / "docquery.yaml", {"search": {"no_regex": False}})
        monkeypatch.setenv("DOCQUERY_SEARCH_NO_REGEX", "true")
        monkeypatch.setenv("DOCQUERY_SEARCH_MATCH_FROM_START", "TRUE")
        monkeypatch.setenv("DOCQUERY_SORT_LOCALE", "es")
        cfg = load_config()
        assert cfg.search.no_regex is True
        assert cfg.search.match_from_start is True
        assert cfg.sort.locale == "es"

    def test_env_override_keeps_numeric_text(self, isolated_config, monkeypatch):
        monkeypatch.setenv("DOCQUERY_SORT_LOCALE", "419")
        assert load_config().sort.locale == "419"

    def test_env_section_name_alone_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("DOCQUERY_TEXT_SEARCH_", "x")
        assert load_config() == DocQueryConfig()

    def test_env_override_multi_word_section(self, isolated_config, monkeypatch):
        monkeypatch.setenv("DOCQUERY_TEXT_SEARCH_FIELDS", "title")
        with pytest.raises(ValidationError):
            load_config()

    def test_unknown_env_section_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("DOCQUERY_NOPE_X", "1")
        assert load_config() == DocQueryConfig()

    def test_invalid_value(self, isolated_config):
        _write(isolated_config / "docquery.yaml", {"logging": {"level": "loud"}})
        with pytest.raises(ValidationError):
            load_config()
