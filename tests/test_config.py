from pathlib import Path

import pytest
import yaml

from qgate.config import Config, dump_default_yaml
from qgate.errors import ConfigError


def test_defaults_are_consistent():
    cfg = Config.from_dict({})
    assert set(cfg.gate.thresholds) - {"overall"} == set(cfg.weights)
    assert cfg.gate.thresholds["overall"] == 70
    assert cfg.sizes.limits["components"] == 200


def test_threshold_without_weight_is_an_error():
    with pytest.raises(ConfigError, match="disagree"):
        Config.from_dict({"gate": {"thresholds": {"lint": 50}}})


def test_weight_without_threshold_is_an_error():
    with pytest.raises(ConfigError):
        Config.from_dict({"weights": {"lint": 0.0}})


def test_weights_must_sum_to_one():
    with pytest.raises(ConfigError, match="sum to 1.0"):
        Config.from_dict({"weights": {"fileSize": 0.5}})


def test_unknown_size_kind_is_an_error():
    with pytest.raises(ConfigError):
        Config.from_dict({"sizes": {"limits": {"widgets": 100}}})


def test_load_yaml_overrides(tmp_path: Path):
    path = tmp_path / "qgate.yml"
    path.write_text(
        "paths:\n  source_root: app\ngate:\n  soft_fail_locally: false\n  thresholds:\n    overall: 80\n",
        encoding="utf-8",
    )
    cfg = Config.load(path)
    assert cfg.paths.source_root == "app"
    assert cfg.gate.soft_fail_locally is False
    assert cfg.gate.thresholds["overall"] == 80
    assert cfg.gate.thresholds["duplication"] == 70


def test_load_empty_file(tmp_path: Path):
    path = tmp_path / "qgate.yml"
    path.write_text("", encoding="utf-8")
    assert Config.load(path).report.json_name == "quality-report.json"


def test_default_yaml_round_trips():
    data = yaml.safe_load(dump_default_yaml())
    assert Config.from_dict(data).weights == Config.from_dict({}).weights


def test_non_numeric_threshold_is_a_config_error():
    with pytest.raises(ConfigError, match="invalid configuration value"):
        Config.from_dict({"gate": {"thresholds": {"overall": "high"}}})


def test_section_that_is_not_a_mapping_is_a_config_error():
    with pytest.raises(ConfigError, match="invalid configuration value"):
        Config.from_dict({"sizes": ["components", 200]})


def test_missing_config_file_is_a_config_error(tmp_path: Path):
    with pytest.raises(ConfigError, match="cannot read configuration file"):
        Config.load(tmp_path / "absent.yml")


def test_unparseable_yaml_is_a_config_error(tmp_path: Path):
    path = tmp_path / "qgate.yml"
    path.write_text("gate: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        Config.load(path)
