# backend/titanic_eda/services/binning.py
"""
Histogram binning for numeric distributions.

Three variants, all returning `HistogramBin` lists ready for charting:
- histogram():      equal-width bins, [lo, hi) except the closed last bin
- quantile_bins():  equal-frequency chunks of the sorted values
- fixed_bins():     caller-supplied edges (e.g. decade age bands)

Degenerate input: no valid values -> no bins; a single distinct value -> one
closed bin [v, v] holding every value.
"""
from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .dataset import is_numeric
from .statistics import label_sign
from ..schemas.analysis import HistogramBin


def sturges_bin_count(n: int) -> int:
    if n <= 1:
        return 1
    return int(math.ceil(math.log2(n))) + 1


def _valid_pairs(values: Sequence[Any], labels: Optional[Sequence[Any]]) -> Tuple[np.ndarray, List[Any]]:
    if labels is not None and len(labels) != len(values):
        raise ValueError("labels must be parallel to values")
    xs, ls = [], []
    for i, v in enumerate(values):
        if is_numeric(v):
            xs.append(float(v))
            ls.append(labels[i] if labels is not None else None)
    return np.asarray(xs, dtype=float), ls


def _positive_rate(labels: List[Any]) -> Optional[float]:
    signs = [s for s in (label_sign(l) for l in labels) if s is not None]
    if not signs:
        return None
    return sum(signs) / len(signs) * 100.0


def _build_bins(edges: Sequence[float], idx: np.ndarray, labels: List[Any], with_rate: bool) -> List[HistogramBin]:
    n_bins = len(edges) - 1
    counts = np.bincount(idx, minlength=n_bins) if idx.size else np.zeros(n_bins, dtype=int)
    bins = []
    for i in range(n_bins):
        rate = None
        if with_rate:
            rate = _positive_rate([labels[k] for k in np.flatnonzero(idx == i)])
        bins.append(HistogramBin(
            lower=float(edges[i]),
            upper=float(edges[i + 1]),
            count=int(counts[i]),
            closed_upper=(i == n_bins - 1),
            positive_rate=rate,
        ))
    return bins


def _single_bin(arr: np.ndarray, labels: List[Any], with_rate: bool) -> List[HistogramBin]:
    v = float(arr[0])
    return [HistogramBin(
        lower=v,
        upper=v,
        count=int(arr.size),
        closed_upper=True,
        positive_rate=_positive_rate(labels) if with_rate else None,
    )]


def histogram(values: Sequence[Any], bin_count: int, labels: Optional[Sequence[Any]] = None) -> List[HistogramBin]:
    """Equal-width histogram; a value on an interior edge belongs to the upper bin."""
    if bin_count <= 0:
        raise ValueError("bin_count must be a positive integer")
    arr, ls = _valid_pairs(values, labels)
    with_rate = labels is not None
    if arr.size == 0:
        return []

    lo, hi = float(arr.min()), float(arr.max())
    if lo == hi:
        return _single_bin(arr, ls, with_rate)

    width = (hi - lo) / bin_count
    edges = lo + width * np.arange(bin_count + 1)
    edges[-1] = hi
    idx = np.clip(np.searchsorted(edges, arr, side="right") - 1, 0, bin_count - 1)
    return _build_bins(edges, idx, ls, with_rate)


def quantile_bins(sorted_values: Sequence[Any], bin_count: int, labels: Optional[Sequence[Any]] = None) -> List[HistogramBin]:
    """
    Equal-frequency bins: consecutive chunks of ceil(n / bin_count) sorted values.

    Bounds are the chunk's observed min and max, so fewer than `bin_count`
    bins come back when n is small.
    """
    if bin_count <= 0:
        raise ValueError("bin_count must be a positive integer")
    arr, ls = _valid_pairs(sorted_values, labels)
    with_rate = labels is not None
    if arr.size == 0:
        return []

    order = np.argsort(arr, kind="stable")
    arr = arr[order]
    ls = [ls[k] for k in order]

    size = int(math.ceil(arr.size / bin_count))
    starts = list(range(0, arr.size, size))
    bins = []
    for n, start in enumerate(starts):
        chunk = arr[start:start + size]
        bins.append(HistogramBin(
            lower=float(chunk[0]),
            upper=float(chunk[-1]),
            count=int(chunk.size),
            closed_upper=(n == len(starts) - 1),
            positive_rate=_positive_rate(ls[start:start + size]) if with_rate else None,
        ))
    return bins


def fixed_bins(values: Sequence[Any], edges: Sequence[float], labels: Optional[Sequence[Any]] = None) -> List[HistogramBin]:
    """Bins on explicit edges; values past the last edge land in the last bin."""
    edges = [float(e) for e in edges]
    if len(edges) < 2 or any(b <= a for a, b in zip(edges, edges[1:])):
        raise ValueError("edges must be at least two strictly increasing numbers")
    arr, ls = _valid_pairs(values, labels)
    with_rate = labels is not None

    keep = arr >= edges[0]
    ls = [l for l, k in zip(ls, keep) if k]
    arr = arr[keep]
    idx = np.clip(np.searchsorted(edges, arr, side="right") - 1, 0, len(edges) - 2)
    return _build_bins(edges, idx.astype(int), ls, with_rate)
