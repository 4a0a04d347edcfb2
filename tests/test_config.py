import json
from copy import deepcopy

import pytest

from utils.config import DEFAULT_CONFIG, load_config, save_config, validate_config
from utils.errors import ConfigurationError


def test_validate_config_accepts_default():
    cfg = deepcopy(DEFAULT_CONFIG)
    validate_config(cfg)


def test_validate_config_rejects_negative_well_width():
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["structure"]["well_width"] = -3.0
    with pytest.raises(ConfigurationError, match="well_width"):
        validate_config(cfg)


def test_validate_config_rejects_fractional_barrier_sites():
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["structure"]["barrier_sites"] = 10.5
    with pytest.raises(ConfigurationError, match="barrier_sites"):
        validate_config(cfg)


def test_validate_config_rejects_bad_y_bounds():
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["plot"]["y_bounds"] = [0.4, 0.0]
    with pytest.raises(ConfigurationError, match="y_bounds"):
        validate_config(cfg)


def test_configuration_error_is_value_error():
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["sweep"]["samples"] = 1
    with pytest.raises(ValueError, match="samples"):
        validate_config(cfg)


def test_load_config_merges_over_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"sweep": {"samples": 10}}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg["sweep"]["samples"] == 10
    assert cfg["sweep"]["k_max"] == DEFAULT_CONFIG["sweep"]["k_max"]
    assert cfg["structure"]["barrier_sites"] == 100


def test_load_config_rejects_invalid_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="JSON"):
        load_config(path)


def test_save_config_roundtrip(tmp_path):
    path = tmp_path / "saved.json"
    save_config(DEFAULT_CONFIG, path)
    assert load_config(path) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "section,key,value,match",
    [
        ("structure", "lattice_spacing", "abc", "structure.lattice_spacing must be a number"),
        ("structure", "well_width", None, "structure.well_width must be a number"),
        ("sweep", "k_max", [0.05], "sweep.k_max must be a number"),
        ("plot", "y_bounds", 5, "plot.y_bounds"),
        ("plot", "y_bounds", ["low", 0.4], r"plot.y_bounds\[0\] must be a number"),
        ("plot", "x_label", 3, "plot.x_label must be a string"),
    ],
)
def test_validate_config_rejects_malformed_values(section, key, value, match):
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg[section][key] = value
    with pytest.raises(ConfigurationError, match=match):
        validate_config(cfg)


@pytest.mark.parametrize("section", ["units", "structure", "materials", "sweep", "plot"])
def test_validate_config_rejects_non_object_section(section):
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg[section] = 5
    with pytest.raises(ConfigurationError, match=f"{section} must be a JSON object"):
        validate_config(cfg)


def test_validate_config_rejects_non_object_material():
    cfg = deepcopy(DEFAULT_CONFIG)
    cfg["materials"]["GaAs"] = "GaAs"
    with pytest.raises(ConfigurationError, match="materials.GaAs must be a JSON object"):
        validate_config(cfg)
