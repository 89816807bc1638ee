from __future__ import annotations

from typing import List
import numpy as np
import pandas as pd

from .dag_paths import reached_mask
from .pipeline import PipelineResult

RULE = "-" * 52


def _fmt_dist(dist: np.ndarray) -> str:
    mask = reached_mask(dist)
    return "[" + ", ".join(str(int(d)) if ok else "-" for d, ok in zip(dist, mask)) + "]"


def metrics_frame(result: PipelineResult) -> pd.DataFrame:
    """One row per stage: operation count and wall-clock time."""
    rows = []
    for stage, m in result.metrics.items():
        row = {"stage": stage, "operations": m.counter, "elapsed_ms": round(m.elapsed_ms, 3)}
        row.update({f"n_{k}": v for k, v in sorted(m.counts.items())})
        rows.append(row)
    return pd.DataFrame(rows).fillna(0)


def distances_frame(result: PipelineResult) -> pd.DataFrame:
    """Per-component distances; unreached entries are NaN."""
    scc = result.scc
    short = result.shortest_dist.astype(np.float64)
    long_ = result.longest_dist.astype(np.float64)
    short[~reached_mask(result.shortest_dist)] = np.nan
    long_[~reached_mask(result.longest_dist)] = np.nan
    return pd.DataFrame({
        "component": np.arange(scc.count),
        "size": scc.component_sizes(),
        "shortest": short,
        "longest": long_,
    })


def format_report(result: PipelineResult) -> str:
    scc = result.scc
    lines: List[str] = ["", "=== SCC (Tarjan) ===", f"Found {scc.count} SCC(s)"]
    for i, comp in enumerate(scc.components):
        lines.append(f"SCC #{i}: {comp} (size={len(comp)})")
    lines.append(f"Condensation DAG: {scc.condensation.n} nodes, {scc.condensation.num_edges} edges")
    m = result.metrics.get("scc")
    if m is not None:
        lines.append(f"Metrics: DFS visits+edges = {m.counter}, time = {m.elapsed_ms:.3f} ms")
    lines.append(RULE)

    lines += ["", "=== Topological Sort (Condensation DAG) ==="]
    lines.append(f"Topological order of components: {result.topo_order}")
    lines.append(f"Derived order of original nodes: {result.derived_order}")
    m = result.metrics.get("topo")
    if m is not None:
        lines.append(f"Metrics: queue pushes+pops = {m.counter}, time = {m.elapsed_ms:.3f} ms")
    lines.append(RULE)

    lines += ["", "=== DAG Shortest & Longest Paths ==="]
    lines.append(f"Source component: {result.source_component}, Target component: {result.target_component}")
    lines.append(f"Shortest distances from source: {_fmt_dist(result.shortest_dist)}")
    lines.append(f"Longest distances from source: {_fmt_dist(result.longest_dist)}")
    kind = "longest" if result.longest else "shortest"
    lines.append(f"Reconstructed path ({kind}): {result.path if result.path else 'unreachable'}")
    lines.append(f"Critical path length: {result.critical_length}")
    relax = sum(result.metrics[k].counter for k in ("shortest", "longest") if k in result.metrics)
    elapsed = sum(result.metrics[k].elapsed_ms for k in ("shortest", "longest") if k in result.metrics)
    lines.append(f"Metrics: relaxations = {relax}, time = {elapsed:.3f} ms")
    lines.append(RULE)
    return "\n".join(lines)
