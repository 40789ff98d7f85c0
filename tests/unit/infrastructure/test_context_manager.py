"""Unit tests for the configuration context."""

import os
import contextvars
from unittest.mock import patch

import pytest

from src.users_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.users_api.runtime.context import (
    AppContext,
    get_config,
    get_context,
    load_default_config,
    merge_configs,
    set_config,
    with_context,
)


class TestContextManager:
    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert context.config is get_config()

    def test_override_applies_inside_block_only(self):
        original = get_config()
        override = ConfigData()
        override.app.host = "custom_host"

        with with_context(override):
            assert get_config().app.host == "custom_host"

        assert get_config() is original

    def test_partial_override_inherits_other_values(self):
        outer = ConfigData()
        outer.app.port = 9001
        outer.logging.level = "DEBUG"

        inner = ConfigData()
        inner.app.port = 9002

        with with_context(outer):
            with with_context(inner):
                config = get_config()
                assert config.app.port == 9002
                assert config.logging.level == "DEBUG"
            assert get_config().app.port == 9001

    def test_none_override_is_a_no_op(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_set_config_replaces_configuration(self):
        replacement = ConfigData()

        def swap() -> ConfigData:
            set_config(replacement)
            return get_config()

        assert contextvars.copy_context().run(swap) is replacement
        assert get_config() is not replacement

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"app": {"port": 1}}):  # type: ignore[arg-type]
                pass


class TestMergeConfigs:
    def test_explicit_section_replaces_defaults(self):
        base = ConfigData()
        base.pagination.default_limit = 10

        merged = merge_configs(base, ConfigData(database=DatabaseConfig(url="sqlite://")))

        assert merged.database.url == "sqlite://"
        assert merged.pagination.default_limit == 10


class TestLoadDefaultConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        with patch.dict(os.environ, {"USERS_API_CONFIG": str(tmp_path / "absent.yaml")}):
            config = load_default_config()

        assert config == ConfigData()

    def test_reads_named_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("config:\n  app:\n    name: custom-users\n", encoding="utf-8")

        with patch.dict(os.environ, {"USERS_API_CONFIG": str(path)}):
            config = load_default_config()

        assert config.app.name == "custom-users"
