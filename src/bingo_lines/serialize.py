from __future__ import annotations

import csv
import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from .lines import cards_hash, matrix_hash
from .models import GenerationResult


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: Optional[int],
    rng_engine: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "hash_algorithm": "sha256",
    }


def emit_cards_json(
    path: Path,
    *,
    result: GenerationResult,
    params: Mapping[str, int],
    run_meta: Dict[str, object],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    entries: List[Dict[str, object]] = []
    for card in result.cards:
        entry = card.to_dict()
        entry["matrix_hash"] = matrix_hash(card.cells)
        entries.append(entry)
    data = {
        "run_meta": run_meta,
        "params": dict(params),
        "cards": entries,
        "cards_hash": cards_hash([c.cells for c in result.cards]),
        "number_distribution": [[n, c] for n, c in result.number_distribution],
        "variance": result.variance,
        "attempts": result.attempts,
    }
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)


def load_cards_json(path: Path) -> Tuple[List[List[List[int]]], Dict[str, int]]:
    """Read matrices and generation params back from a cards.json artifact."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("cards"), list):
        raise ValueError(f"Not a cards artifact: {path}")
    params = data.get("params") or {}
    return [entry["cells"] for entry in data["cards"]], dict(params)


def emit_report_json(
    path: Path, *, report: Dict[str, object], mkdirs: bool, overwrite: bool
) -> None:
    write_json(path, report, mkdirs=mkdirs, overwrite=overwrite)


def emit_summary_csv(
    path: Path,
    *,
    freqs: Mapping[int, int],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["number", "total"])
        for num in sorted(freqs.keys()):
            writer.writerow([num, freqs[num]])
