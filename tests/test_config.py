"""pytest tests for configuration loading."""

import pytest

from maxlog_cli.config.global_config import MaxlogConfig, load_config, parse_bool
from maxlog_cli.core.errors import ConfigError


def test_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.yml", environ={})
    assert cfg == MaxlogConfig()
    assert cfg.tail == "40"
    assert cfg.use_nerdfont is True


def test_environment_is_read(tmp_path):
    cfg = load_config(tmp_path / "missing.yml", environ={
        "MAXLOG_MODE": "k8s",
        "MAXLOG_K8S_NAMESPACE": "mas-inst1-manage",
        "MAXLOG_K8S_APPTYPE": "ui",
        "MAXLOG_TAIL": "100",
        "MAXLOG_FOCUS": "order",
        "MAXLOG_USE_NERDFONT": "no",
    })
    assert cfg.mode == "k8s"
    assert cfg.namespace == "mas-inst1-manage"
    assert cfg.apptype == "ui"
    assert cfg.tail_lines() == 100
    assert cfg.focus == "order"
    assert cfg.use_nerdfont is False


def test_environment_overrides_file(tmp_path):
    config_file = tmp_path / "maxlog-config.yml"
    config_file.write_text("mode: pod\ncontainer: from-file\ntail: 15\nuse_nerdfont: false\n")

    cfg = load_config(config_file, environ={"MAXLOG_CONTAINER": "from-env"})

    assert cfg.mode == "pod"
    assert cfg.container == "from-env"
    assert cfg.tail == "15"
    assert cfg.use_nerdfont is False


def test_invalid_file_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "maxlog-config.yml"
    config_file.write_text("mode: [unterminated\n")
    assert load_config(config_file, environ={}) == MaxlogConfig()


def test_unknown_file_keys_are_ignored(tmp_path):
    config_file = tmp_path / "maxlog-config.yml"
    config_file.write_text("mode: pod\ncolour: blue\n")
    assert load_config(config_file, environ={}).mode == "pod"


@pytest.mark.parametrize("tail", ["abc", "0", "-5", "", "1.5", "\u00b2"])
def test_invalid_tail_is_rejected(tail):
    with pytest.raises(ConfigError):
        MaxlogConfig(tail=tail).tail_lines()


def test_mode_must_be_known():
    with pytest.raises(ConfigError, match="MAXLOG_MODE is not set"):
        MaxlogConfig().validate_mode()
    with pytest.raises(ConfigError, match="Unknown mode"):
        MaxlogConfig(mode="swarm").validate_mode()
    assert MaxlogConfig(mode="pod").validate_mode() == "pod"


@pytest.mark.parametrize("value,expected", [
    ("0", False), ("no", False), ("false", False), ("False", False),
    ("1", True), ("yes", True), ("true", True), (True, True), (False, False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
