"""Reusable statistical helpers shared by the law analyzers, validator and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.stats import multitest
from statsmodels.stats.stattools import jarque_bera


def as_sample(values: Sequence[float]) -> np.ndarray:
    """Return a float64 array with non-finite entries removed."""
    arr = np.asarray(values, dtype=float)
    return arr[np.isfinite(arr)]


def normality_test(values: Sequence[float], *, method: str = "auto") -> Tuple[str, float, float]:
    """Run a normality test and return (method, stat, p)."""
    cleaned = as_sample(values)
    if cleaned.size < 3:
        raise ValueError("Sample needs at least 3 finite values for a normality test.")
    if method == "auto":
        method = "shapiro" if cleaned.size <= 5000 else "dagostino"
    if method == "shapiro":
        stat, p = stats.shapiro(cleaned)
    elif method == "dagostino":
        stat, p = stats.normaltest(cleaned)
    elif method == "jarque_bera":
        stat, p, _, _ = jarque_bera(cleaned)
    else:
        raise ValueError(f"Unsupported method: {method}")
    return method, float(stat), float(np.clip(p, 0.0, 1.0))


def shape_moments(values: Sequence[float]) -> Tuple[float, float]:
    """Skewness and excess kurtosis; (0, 0) for constant samples."""
    arr = as_sample(values)
    if arr.size < 2 or np.ptp(arr) == 0:
        return 0.0, 0.0
    return float(stats.skew(arr)), float(stats.kurtosis(arr, fisher=True))


def chi_square_gof(observed: Sequence[float], expected_probs: Sequence[float], *, ddof: int = 0) -> Tuple[float, float]:
    """Pearson chi-square of observed counts against expected probabilities."""
    obs = np.asarray(observed, dtype=float)
    probs = np.asarray(expected_probs, dtype=float)
    probs = probs / probs.sum()
    expected = probs * obs.sum()
    stat, p = stats.chisquare(obs, expected, ddof=ddof)
    return float(stat), float(np.clip(p, 0.0, 1.0))


def gini_coefficient(values: Sequence[float]) -> float:
    """Normalized Gini index: 0 for perfectly even values, 1 for one holder of everything."""
    arr = np.sort(as_sample(values))
    n = arr.size
    total = arr.sum()
    if n < 2 or total <= 0:
        return 0.0
    ranks = np.arange(1, n + 1)
    gini = np.sum((2 * ranks - n - 1) * arr) / (n * total)
    return float(np.clip(gini * n / (n - 1), 0.0, 1.0))


@dataclass(frozen=True)
class LogLogFit:
    slope: float
    intercept: float
    r_value: float
    rms_residual: float


def log_log_fit(x: Sequence[float], y: Sequence[float]) -> LogLogFit:
    """Least-squares fit of log(y) on log(x); both must be positive."""
    log_x = np.log(np.asarray(x, dtype=float))
    log_y = np.log(np.asarray(y, dtype=float))
    fit = stats.linregress(log_x, log_y)
    residuals = log_y - (fit.intercept + fit.slope * log_x)
    r_value = float(fit.rvalue) if np.isfinite(fit.rvalue) else 0.0
    return LogLogFit(
        slope=float(fit.slope),
        intercept=float(fit.intercept),
        r_value=float(np.clip(r_value, -1.0, 1.0)),
        rms_residual=float(np.sqrt(np.mean(residuals ** 2))),
    )


def iqr_fence(values: Sequence[float], k: float = 1.5) -> Tuple[float, float]:
    """Tukey fences (Q1 - k*IQR, Q3 + k*IQR)."""
    q1, q3 = np.percentile(as_sample(values), [25, 75])
    iqr = q3 - q1
    return float(q1 - k * iqr), float(q3 + k * iqr)


def robust_zscores(values: Sequence[float]) -> np.ndarray:
    """Modified z-scores based on the median absolute deviation."""
    arr = as_sample(values)
    median = np.median(arr)
    mad = np.median(np.abs(arr - median))
    if mad == 0:
        return np.zeros_like(arr)
    return 0.6745 * (arr - median) / mad


def dispersion_index_test(counts: Sequence[float]) -> Tuple[float, float]:
    """Two-sided index-of-dispersion test of equidispersion; returns (stat, p)."""
    arr = as_sample(counts)
    n = arr.size
    mean = arr.mean()
    if n < 2 or mean <= 0:
        return float("nan"), 0.0
    stat = (n - 1) * arr.var(ddof=1) / mean
    lower = stats.chi2.cdf(stat, n - 1)
    p = 2 * min(lower, 1 - lower)
    return float(stat), float(np.clip(p, 0.0, 1.0))


def describe_sample(values: Sequence[float]) -> pd.Series:
    """pandas describe() plus the median and the share of duplicated values."""
    series = pd.Series(as_sample(values), dtype=float)
    summary = series.describe()
    summary["median"] = series.median()
    summary["duplicate_ratio"] = float(series.duplicated().mean()) if len(series) else 0.0
    return summary


def fdr_correction(p_values: Sequence[float], alpha: float = 0.05, method: str = "fdr_bh") -> dict:
    rejected, q_values, _, _ = multitest.multipletests(p_values, alpha=alpha, method=method)
    return {
        "method": method,
        "alpha": alpha,
        "rejected": list(map(bool, rejected)),
        "q_values": [float(q) for q in q_values],
    }
