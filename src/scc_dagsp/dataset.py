from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import json
import logging

import numpy as np

from .errors import InvalidArgumentError
from .graph import Graph

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

# name -> (n_min, n_max, density, allow_cycles)
STANDARD_SUITE: Dict[str, Tuple[int, int, float, bool]] = {
    "small_1": (6, 8, 0.12, False),
    "small_2": (7, 10, 0.18, True),    # one cycle
    "small_3": (6, 10, 0.28, True),    # two cycles
    "medium_1": (10, 14, 0.08, False),
    "medium_2": (12, 18, 0.12, True),  # several SCCs
    "medium_3": (14, 20, 0.20, True),  # denser + multi-SCC
    "large_1": (20, 30, 0.04, False),  # sparse
    "large_2": (25, 40, 0.08, True),
    "large_3": (30, 50, 0.16, True),
}


@dataclass
class Dataset:
    """Edge-list description of a directed weighted graph (JSON input format)."""

    n: int
    edges: List[Tuple[int, int, int]] = field(default_factory=list)
    source: int = 0
    directed: bool = True
    weight_model: str = "edge"

    def to_graph(self) -> Graph:
        return Graph.from_edges(self.n, self.edges)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directed": self.directed,
            "n": self.n,
            "edges": [{"u": u, "v": v, "w": w} for u, v, w in self.edges],
            "source": self.source,
            "weight_model": self.weight_model,
        }


def _is_int(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def dataset_from_dict(obj: Mapping[str, Any]) -> Dataset:
    """Validate a decoded JSON object and turn it into a ``Dataset``."""
    if not isinstance(obj, Mapping):
        raise InvalidArgumentError("Dataset must be a JSON object")
    for key in ("n", "edges"):
        if key not in obj:
            raise InvalidArgumentError(f"Dataset is missing required key {key!r}")
    if not obj.get("directed", True):
        raise InvalidArgumentError("Only directed graphs are supported")

    n = obj["n"]
    if not _is_int(n) or n < 0:
        raise InvalidArgumentError(f"'n' must be a non-negative integer, got {n!r}")

    raw_edges = obj["edges"]
    if not isinstance(raw_edges, list):
        raise InvalidArgumentError(f"'edges' must be a list, got {raw_edges!r}")

    edges: List[Tuple[int, int, int]] = []
    for i, e in enumerate(raw_edges):
        if not isinstance(e, Mapping) or "u" not in e or "v" not in e:
            raise InvalidArgumentError(f"Malformed edge #{i}: {e!r}")
        triple = (e["u"], e["v"], e.get("w", 1))
        if not all(_is_int(x) for x in triple):
            raise InvalidArgumentError(f"Malformed edge #{i}: {e!r}")
        edges.append(triple)

    source = obj.get("source")
    if source is not None and not _is_int(source):
        raise InvalidArgumentError(f"'source' must be an integer, got {source!r}")
    return Dataset(
        n=n,
        edges=edges,
        source=0 if source is None else source,
        directed=True,
        weight_model=str(obj.get("weight_model", "edge")),
    )


def load_dataset(path: PathLike) -> Dataset:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            obj = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidArgumentError(f"{path}: invalid JSON ({exc})") from exc
    ds = dataset_from_dict(obj)
    LOGGER.debug("load_dataset path=%s n=%d edges=%d", path, ds.n, len(ds.edges))
    return ds


def save_dataset(ds: Dataset, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(ds.to_dict(), f, indent=2)
    return path


def _weight(rng: np.random.Generator) -> int:
    return int(rng.integers(1, 10))  # weights 1..9


def generate_dataset(
    n: int,
    density: float,
    allow_cycles: bool,
    rng: np.random.Generator,
    *,
    source: int = 0,
) -> Dataset:
    """Random directed dataset.

    Each ordered pair u != v gets an edge with probability ``density``. With
    ``allow_cycles`` a few groups of 2..4 consecutive vertices are wired in
    both directions around a ring so that they form SCCs. The source always
    gets at least one outgoing edge. Duplicate (u, v) pairs keep the first.
    """
    if n < 1:
        raise InvalidArgumentError(f"n must be positive, got {n}")
    if not 0.0 <= density <= 1.0:
        raise InvalidArgumentError(f"density must lie in [0, 1], got {density}")

    edges: List[Tuple[int, int, int]] = []
    pairs = set()

    def add(u: int, v: int) -> None:
        if (u, v) not in pairs:
            pairs.add((u, v))
            edges.append((u, v, _weight(rng)))

    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < density:
                add(u, v)

    if allow_cycles:
        groups = min(3, max(1, n // 6))
        for _ in range(groups):
            size = min(4, max(2, int(rng.integers(0, max(2, n // 6))) + 2))
            base = int(rng.integers(0, max(1, n - size + 1)))
            for i in range(size):
                a = (base + i) % n
                b = (base + (i + 1) % size) % n
                if a != b:
                    add(a, b)
                    add(b, a)

    if n > 1 and not any(u == source for u, _, _ in edges):
        add(source, 1 if source != 1 else 0)

    return Dataset(n=n, edges=edges, source=source)


def generate_suite(
    out_dir: PathLike,
    seed: int = 42,
    suite: Optional[Mapping[str, Tuple[int, int, float, bool]]] = None,
) -> List[Path]:
    """Write the standard small/medium/large datasets as ``<name>.json``."""
    rng = np.random.default_rng(seed)
    out_dir = Path(out_dir)
    written = []
    for name, (n_min, n_max, density, allow_cycles) in (suite or STANDARD_SUITE).items():
        n = int(rng.integers(n_min, n_max + 1))
        ds = generate_dataset(n, density, allow_cycles, rng)
        path = save_dataset(ds, out_dir / f"{name}.json")
        LOGGER.info("Wrote %s (n=%d, edges=%d)", path, ds.n, len(ds.edges))
        written.append(path)
    return written
