"""
Tests for the dispatcher configuration file.
"""

import re

import pytest
import yaml

from pbl.core.config import ConfigError, PblConfig


def test_defaults_without_file(tmp_path):
    config = PblConfig(tmp_path / "absent.yml")
    assert str(config.backend_root) == "/usr/lib/bootloader"
    assert config.log_file == "/var/log/pbl.log"
    assert str(config.bootloader_settings) == "/etc/sysconfig/bootloader"
    assert str(config.language_settings) == "/etc/sysconfig/language"


def test_empty_file_means_defaults(tmp_path):
    path = tmp_path / "pbl.yml"
    path.write_text("")
    assert PblConfig(path).log_file == "/var/log/pbl.log"


def test_partial_override(tmp_path):
    path = tmp_path / "pbl.yml"
    path.write_text(yaml.safe_dump({
        'backend_root': '/opt/bootloader',
        'settings_sources': {'language': '/tmp/language'},
        'unknown_key': 1,
    }))
    config = PblConfig(path)
    assert str(config.backend_root) == "/opt/bootloader"
    assert str(config.language_settings) == "/tmp/language"
    assert str(config.bootloader_settings) == "/etc/sysconfig/bootloader"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yml"
    path.write_text("log_file: /tmp/env.log\n")
    monkeypatch.setenv("PBL_CONFIG", str(path))
    assert PblConfig().log_file == "/tmp/env.log"


def test_set_overrides(tmp_path):
    config = PblConfig(tmp_path / "absent.yml")
    config.set('log_file', '/dev/null')
    assert config.log_file == '/dev/null'


@pytest.mark.parametrize("text", [
    "backend_root: [unclosed\n",
    "- a list\n- not a mapping\n",
    "backend_root: 42\n",
    "settings_sources: /etc/sysconfig\n",
    "settings_sources:\n  bootloader: ''\n",
])
def test_invalid_config_rejected(tmp_path, text):
    path = tmp_path / "pbl.yml"
    path.write_text(text)
    with pytest.raises(ConfigError, match=re.escape(str(path))):
        PblConfig(path)
