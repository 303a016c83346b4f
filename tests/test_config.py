"""Tests for configuration loading"""

import json

import pytest

from watchpkg.core.config import Settings
from watchpkg.plugins.base import ConfigurationShapeError, PluginConfigurationError
from watchpkg.plugins.config import WatchPkgConfig, load_config_file, parse_config


class TestParseConfig:
    """Test validation of raw configuration data"""

    def test_scripts_and_packages(self):
        """SCRIPTS and PKGS are read in configuration order"""
        config = parse_config(
            {"SCRIPTS": ["/bin/b.sh", "/bin/a.sh"], "PKGS": ["curl", "www/nginx"]}
        )

        assert config.scripts == ["/bin/b.sh", "/bin/a.sh"]
        assert config.packages == ["curl", "www/nginx"]

    def test_duplicates_are_dropped(self):
        """Only the first occurrence of a value is kept"""
        config = parse_config(
            {"SCRIPTS": ["/bin/a.sh", "/bin/b.sh", "/bin/a.sh"], "PKGS": ["x", "x"]}
        )

        assert config.scripts == ["/bin/a.sh", "/bin/b.sh"]
        assert config.packages == ["x"]

    def test_empty_values_are_dropped(self):
        """Empty strings and nulls are silently ignored"""
        config = parse_config({"SCRIPTS": ["", "/bin/a.sh", None], "PKGS": [""]})

        assert config.scripts == ["/bin/a.sh"]
        assert config.packages == []

    def test_single_string(self):
        """A bare string counts as a one-element list"""
        config = parse_config({"SCRIPTS": "/bin/a.sh"})

        assert config.scripts == ["/bin/a.sh"]

    def test_missing_settings(self):
        """Absent settings are empty lists"""
        config = parse_config({})

        assert config.scripts == []
        assert config.packages == []

    def test_none_is_empty(self):
        """An empty document is an empty configuration"""
        assert parse_config(None) == WatchPkgConfig()

    @pytest.mark.parametrize("data", [["/bin/a.sh"], "SCRIPTS", 42])
    def test_non_mapping_is_shape_error(self, data):
        """The configuration must be a mapping"""
        with pytest.raises(ConfigurationShapeError):
            parse_config(data)

    def test_invalid_setting_type(self):
        """A mapping where a list is expected is rejected"""
        with pytest.raises(PluginConfigurationError) as exc_info:
            parse_config({"SCRIPTS": {"a": "/bin/a.sh"}})

        assert not isinstance(exc_info.value, ConfigurationShapeError)

    def test_to_dict(self):
        """to_dict uses the configuration keys"""
        config = WatchPkgConfig(scripts=["/bin/a.sh"], packages=["curl"])

        assert config.to_dict() == {"SCRIPTS": ["/bin/a.sh"], "PKGS": ["curl"]}


class TestLoadConfigFile:
    """Test reading configuration files"""

    def test_yaml(self, tmp_path):
        """YAML files are supported"""
        path = tmp_path / "watchpkg.yaml"
        path.write_text('SCRIPTS:\n  - /bin/notify.sh\n  - ""\nPKGS:\n  - ftp/curl\n')

        config = load_config_file(path)

        assert config.scripts == ["/bin/notify.sh"]
        assert config.packages == ["ftp/curl"]

    def test_json(self, tmp_path):
        """JSON files are supported"""
        path = tmp_path / "watchpkg.json"
        path.write_text(json.dumps({"SCRIPTS": ["/bin/notify.sh"], "PKGS": []}))

        config = load_config_file(path)

        assert config.scripts == ["/bin/notify.sh"]
        assert config.packages == []

    def test_conf_is_yaml(self, tmp_path):
        """.conf files are read as YAML"""
        path = tmp_path / "watchpkg.conf"
        path.write_text("SCRIPTS: /bin/notify.sh\nPKGS:\n  - curl\n")

        config = load_config_file(path)

        assert config.scripts == ["/bin/notify.sh"]
        assert config.packages == ["curl"]

    def test_missing_file(self, tmp_path):
        """A missing file is an empty configuration"""
        config = load_config_file(tmp_path / "absent.yaml")

        assert config.scripts == []

    def test_unsupported_format(self, tmp_path):
        """Unknown file suffixes are rejected"""
        path = tmp_path / "watchpkg.ini"
        path.write_text("[watchpkg]\n")

        with pytest.raises(PluginConfigurationError):
            load_config_file(path)

    def test_malformed_yaml(self, tmp_path):
        """Unparseable files are reported as configuration errors"""
        path = tmp_path / "watchpkg.yaml"
        path.write_text("SCRIPTS: [unclosed\n")

        with pytest.raises(PluginConfigurationError):
            load_config_file(path)

    def test_yaml_list_document(self, tmp_path):
        """A YAML list at the top level is a shape error"""
        path = tmp_path / "watchpkg.yaml"
        path.write_text("- /bin/notify.sh\n")

        with pytest.raises(ConfigurationShapeError):
            load_config_file(path)


class TestSettings:
    """Test application settings"""

    def test_defaults(self, monkeypatch):
        """Settings have sensible defaults"""
        monkeypatch.delenv("WATCHPKG_LOG_LEVEL", raising=False)
        monkeypatch.delenv("WATCHPKG_CONFIG_FILE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.config_file.name == "watchpkg.yaml"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """WATCHPKG_ environment variables override defaults"""
        monkeypatch.setenv("WATCHPKG_CONFIG_FILE", str(tmp_path / "custom.yaml"))
        monkeypatch.setenv("WATCHPKG_LOG_FORMAT", "json")

        settings = Settings(_env_file=None)

        assert settings.config_file == tmp_path / "custom.yaml"
        assert settings.log_format == "json"
