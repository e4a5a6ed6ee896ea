"""Run settings for the CLI: defaults < config file < ENV < command line.

A config file is YAML or JSON with flat keys::

    num_cards: 30
    min_num: 1
    max_num: 40
    seed: 42            # or {value: 42, engine: numpy_pcg64}
    out_cards: out/cards.json

Output paths written in the config file are relative to the file's
directory; paths from ENV or the command line are relative to the CWD.
"""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .rng import ENGINES

ENV_PREFIX = "BINGO_LINES_"

ENV_KEYS: Dict[str, str] = {
    "NUM_CARDS": "num_cards",
    "MIN_NUM": "min_num",
    "MAX_NUM": "max_num",
    "SEED_VALUE": "seed",
    "SEED_ENGINE": "rng_engine",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
    "LOG_FILE": "log_file",
    "OUT_CARDS": "out_cards",
    "OUT_REPORT": "out_report",
    "SUMMARY_CSV": "summary_csv",
}

DEFAULTS: Dict[str, Any] = {
    "num_cards": 10,
    "min_num": 1,
    "max_num": 75,
    "seed": None,
    "rng_engine": "py_random",
    "log_level": "INFO",
    "log_format": "text",
    "log_file": None,
    "out_cards": "cards.json",
    "out_report": "report.json",
    "summary_csv": None,
}

PATH_KEYS = ("out_cards", "out_report", "log_file", "summary_csv")
LOG_FORMATS = ("text", "json")

# (value, where it came from)
Layer = Dict[str, Tuple[Any, str]]


@dataclass(frozen=True)
class RunSettings:
    num_cards: int
    min_num: int
    max_num: int
    seed: Optional[int]
    rng_engine: str
    log_level: str
    log_format: str
    log_file: Optional[str]
    out_cards: str
    out_report: str
    summary_csv: Optional[str]

    def contract(self) -> Dict[str, Any]:
        """The fields that decide which cards a run produces."""
        return {
            "num_cards": self.num_cards,
            "min_num": self.min_num,
            "max_num": self.max_num,
            "seed": self.seed,
            "rng_engine": self.rng_engine,
        }

    def params_hash(self) -> str:
        payload = json.dumps(self.contract(), ensure_ascii=True, sort_keys=True, separators=(",", ":"))
        return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _load_file(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported config extension: {suffix}")
    if not isinstance(data, dict):
        raise ValueError(f"Top-level config in {config_path.name} must be a mapping")
    return data


def _file_layer(data: Mapping[str, Any], source: str) -> Layer:
    layer: Layer = {}
    for key, value in data.items():
        if key == "seed" and isinstance(value, dict):
            unknown = set(value) - {"value", "engine"}
            if unknown:
                raise ValueError(f"Unknown seed keys in {source}: {sorted(unknown)}")
            if "value" in value:
                layer["seed"] = (value["value"], source)
            if "engine" in value:
                layer["rng_engine"] = (value["engine"], source)
        elif key in DEFAULTS:
            layer[key] = (value, source)
        else:
            raise ValueError(f"Unknown config key in {source}: {key!r}")
    return layer


def _env_layer(env: Mapping[str, str]) -> Layer:
    return {
        cfg_key: (env[ENV_PREFIX + suffix], ENV_PREFIX + suffix)
        for suffix, cfg_key in ENV_KEYS.items()
        if ENV_PREFIX + suffix in env
    }


def _cli_layer(overrides: Mapping[str, Any]) -> Layer:
    unknown = set(overrides) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown settings: {sorted(unknown)}")
    return {key: (value, "command line") for key, value in overrides.items() if value is not None}


def _as_int(key: str, value: Any, source: str) -> int:
    # bool is an int subclass; `num_cards: yes` in YAML is a mistake
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r} (from {source})")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{key} must be an integer, got {value!r} (from {source})")


def _as_path(value: Any, source: str, config_dir: Optional[Path]) -> Optional[str]:
    if value is None or value == "":
        return None
    p = Path(str(value))
    if p.is_absolute():
        return str(p)
    base = config_dir if (config_dir is not None and source == "config file") else Path.cwd()
    return str((base / p).resolve())


def _build_settings(merged: Layer, config_dir: Optional[Path]) -> RunSettings:
    values: Dict[str, Any] = {}
    for key in ("num_cards", "min_num", "max_num"):
        values[key] = _as_int(key, *merged[key])

    seed, seed_source = merged["seed"]
    values["seed"] = None if seed is None else _as_int("seed", seed, seed_source)

    engine, engine_source = merged["rng_engine"]
    engine = str(engine).strip().lower()
    if engine not in ENGINES:
        raise ValueError(f"rng engine must be one of {', '.join(ENGINES)}, got {engine!r} (from {engine_source})")
    values["rng_engine"] = engine

    log_format, fmt_source = merged["log_format"]
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be 'text' or 'json', got {log_format!r} (from {fmt_source})")
    values["log_format"] = log_format
    values["log_level"] = str(merged["log_level"][0]).upper()

    for key in PATH_KEYS:
        values[key] = _as_path(*merged[key], config_dir)

    return RunSettings(**values)


def resolve_parameters(
    *,
    config_path_str: str | None,
    cli_overrides: Dict[str, Any],
    env: Mapping[str, str] | None = None,
) -> Tuple[RunSettings, str, Path | None]:
    """Resolve settings with precedence CLI > ENV > config > defaults.

    Returns (settings, params_hash, config_path). Bad values raise
    ValueError naming the key and where the value came from.
    """
    config_path = Path(config_path_str).resolve() if config_path_str else None

    layers: List[Layer] = [{key: (value, "defaults") for key, value in DEFAULTS.items()}]
    if config_path:
        layers.append(_file_layer(_load_file(config_path), "config file"))
    layers.append(_env_layer(os.environ if env is None else env))
    layers.append(_cli_layer(cli_overrides))

    merged: Layer = {}
    for layer in layers:
        merged.update(layer)

    settings = _build_settings(merged, config_path.parent if config_path else None)
    return settings, settings.params_hash(), config_path
