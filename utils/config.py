"""Configuration loading and validation."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path

from utils.errors import ConfigurationError


DEFAULT_CONFIG = {
    "units": {
        "charge": "1 C",
        "count": "1 pcs",
        "energy": "1 eV",
        "length": "1 Ao",
        "temperature": "1 K",
        "time": "1 s",
    },
    "structure": {
        "lattice_spacing": 3.0,
        "barrier_sites": 100,
        "well_width": 69.0,
        "aluminium_fraction": 0.3,
    },
    "materials": {
        "GaAs": {"name": "GaAs", "mass_ratio": 0.07, "band_offset_eV": 0.0},
        "AlAs": {"name": "AlAs", "mass_ratio": 0.15, "band_offset_eV": 1.25},
    },
    "sweep": {
        "k_min": 0.0,
        "k_max": 0.05,
        "samples": 100,
        "num_bands": 2,
        "workers": 1,
    },
    "plot": {
        "x_label": "Width",
        "y_label": "Energy (eV)",
        "y_bounds": [0.0, 0.4],
        "output": "figures/EigenValues.png",
    },
}


def _deep_update(base: dict, updates: dict) -> dict:
    for k, v in updates.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_update(base[k], v)
        else:
            base[k] = v
    return base


def load_config(path: str | Path | None) -> dict:
    cfg = deepcopy(DEFAULT_CONFIG)
    if path is None:
        return validate_config(cfg)

    try:
        with Path(path).open("r", encoding="utf-8-sig") as f:
            user_cfg = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(user_cfg, dict):
        raise ConfigurationError("config file must contain a JSON object")
    _deep_update(cfg, user_cfg)
    return validate_config(cfg)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _section(cfg: dict, key: str) -> dict:
    section = cfg.get(key)
    if not isinstance(section, dict):
        raise ConfigurationError(f"{key} must be a JSON object")
    return section


def _as_float(value, path: str) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{path} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{path} must be a number") from exc


def validate_config(cfg: dict) -> dict:
    units = _section(cfg, "units")
    for key in ("charge", "count", "energy", "length", "temperature", "time"):
        if not isinstance(units.get(key), str):
            raise ConfigurationError(f"units.{key} must be a string such as '1 eV'")

    structure = _section(cfg, "structure")
    if _as_float(structure.get("lattice_spacing"), "structure.lattice_spacing") <= 0:
        raise ConfigurationError("structure.lattice_spacing must be positive")
    if not _is_int(structure.get("barrier_sites")) or structure["barrier_sites"] < 0:
        raise ConfigurationError("structure.barrier_sites must be a non-negative integer")
    if _as_float(structure.get("well_width"), "structure.well_width") < 0:
        raise ConfigurationError("structure.well_width must be non-negative")
    fraction = _as_float(structure.get("aluminium_fraction"), "structure.aluminium_fraction")
    if fraction < 0 or fraction > 1:
        raise ConfigurationError("structure.aluminium_fraction must be in [0, 1]")

    materials = _section(cfg, "materials")
    for name in ("GaAs", "AlAs"):
        if name not in materials:
            raise ConfigurationError(f"materials.{name} is required")
        material = materials[name]
        if not isinstance(material, dict):
            raise ConfigurationError(f"materials.{name} must be a JSON object")
        if _as_float(material.get("mass_ratio"), f"materials.{name}.mass_ratio") <= 0:
            raise ConfigurationError(f"materials.{name}.mass_ratio must be positive")
        _as_float(material.get("band_offset_eV", 0.0), f"materials.{name}.band_offset_eV")

    sweep = _section(cfg, "sweep")
    if not _is_int(sweep.get("samples")) or sweep["samples"] < 2:
        raise ConfigurationError("sweep.samples must be an integer >= 2")
    if _as_float(sweep.get("k_max"), "sweep.k_max") < _as_float(sweep.get("k_min"), "sweep.k_min"):
        raise ConfigurationError("sweep.k_max must be >= sweep.k_min")
    if not _is_int(sweep.get("num_bands")) or sweep["num_bands"] <= 0:
        raise ConfigurationError("sweep.num_bands must be a positive integer")
    if not _is_int(sweep.get("workers")) or sweep["workers"] <= 0:
        raise ConfigurationError("sweep.workers must be a positive integer")

    plot = _section(cfg, "plot")
    bounds = plot.get("y_bounds")
    if bounds is not None:
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ConfigurationError("plot.y_bounds must be [low, high] with low < high")
        low = _as_float(bounds[0], "plot.y_bounds[0]")
        high = _as_float(bounds[1], "plot.y_bounds[1]")
        if low >= high:
            raise ConfigurationError("plot.y_bounds must be [low, high] with low < high")
    for key in ("x_label", "y_label", "output"):
        if not isinstance(plot.get(key), str):
            raise ConfigurationError(f"plot.{key} must be a string")
    if not plot["output"]:
        raise ConfigurationError("plot.output must be a file path")

    return cfg


def save_config(cfg: dict, out_path: str | Path) -> None:
    with Path(out_path).open("w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
