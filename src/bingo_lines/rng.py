"""Seeded random sources for card generation.

The generator only needs two things from an RNG: a float in [0, 1) for the
weighted draw and an in-place shuffle for the cell layout. Both engines
expose exactly that, so a run is reproducible from ``(engine, seed)``.
"""

from __future__ import annotations

import hashlib
import random
from typing import List, Optional


try:
    import numpy as _np  # type: ignore
except ImportError:  # pragma: no cover - optional
    _np = None


ENGINES = ("py_random", "numpy_pcg64")

_SEED_MASK = (1 << 63) - 1


class RandomSource:
    """What the card builder draws from."""

    engine = ""

    def random(self) -> float:
        raise NotImplementedError

    def shuffle(self, cells: List[int]) -> None:
        raise NotImplementedError


class PyRandomSource(RandomSource):
    engine = "py_random"

    def __init__(self, seed: int):
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def shuffle(self, cells: List[int]) -> None:
        self._rng.shuffle(cells)


class NumpyPCG64Source(RandomSource):  # pragma: no cover - needs the pcg extra
    engine = "numpy_pcg64"

    def __init__(self, seed: int):
        if _np is None:
            raise RuntimeError("numpy_pcg64 needs numpy: pip install bingo-lines[pcg]")
        self._rng = _np.random.Generator(_np.random.PCG64(seed))

    def random(self) -> float:
        return float(self._rng.random())

    def shuffle(self, cells: List[int]) -> None:
        self._rng.shuffle(cells)


_SOURCES = {cls.engine: cls for cls in (PyRandomSource, NumpyPCG64Source)}


def create_rng(engine: str, seed: int) -> RandomSource:
    name = (engine or "py_random").strip().lower()
    try:
        source = _SOURCES[name]
    except KeyError:
        raise ValueError(f"Unknown RNG engine {engine!r}; expected one of {', '.join(ENGINES)}") from None
    return source(seed)


def resolve_seed(seed: Optional[int]) -> int:
    """The run seed: the caller's, or 63 fresh bits so the run can be replayed."""
    if seed is not None:
        return int(seed)
    return random.SystemRandom().getrandbits(63)


def derive_attempt_seed(base_seed: int, index: int, purpose: str) -> int:
    """Seed for attempt ``index`` of a run: sha256 of ``base|index|purpose``, cut to 63 bits."""
    digest = hashlib.sha256(f"{base_seed}|{index}|{purpose}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big") & _SEED_MASK
