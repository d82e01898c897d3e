"""Poisson conformity analysis of event counts."""

import math
from typing import List, Tuple

import numpy as np
from scipy import stats

from ..config import AnalysisOptions
from ..results import PoissonAnalysis, RiskLevel
from ..stats import chi_square_gof, dispersion_index_test
from ..utils.exceptions import InsufficientData
from ..utils.logger_config import setup_logger

logger = setup_logger(__name__)

MIN_EXPECTED_PER_BIN = 5.0
LOW_CONFIDENCE_SAMPLE = 10

# variance/mean tolerated on either side of 1, as a factor
LOW_DISPERSION = 1.5
MEDIUM_DISPERSION = 2.0


def _merge_bins(observed: np.ndarray, expected: np.ndarray) -> Tuple[List[float], List[float]]:
    """Merge adjacent bins left to right until each expects at least MIN_EXPECTED_PER_BIN."""
    merged_obs: List[float] = []
    merged_exp: List[float] = []
    acc_obs = acc_exp = 0.0
    for obs, exp in zip(observed, expected):
        acc_obs += obs
        acc_exp += exp
        if acc_exp >= MIN_EXPECTED_PER_BIN:
            merged_obs.append(acc_obs)
            merged_exp.append(acc_exp)
            acc_obs = acc_exp = 0.0
    if acc_exp > 0 or acc_obs > 0:
        if merged_obs:
            merged_obs[-1] += acc_obs
            merged_exp[-1] += acc_exp
        else:
            merged_obs.append(acc_obs)
            merged_exp.append(acc_exp)
    return merged_obs, merged_exp


def goodness_of_fit(counts: np.ndarray, lam: float) -> Tuple[str, float]:
    """Chi-square p-value against Poisson(lam); dispersion test when too few bins survive."""
    binned = np.rint(counts).astype(int)
    n = binned.size
    top = int(binned.max())

    observed = np.array([np.count_nonzero(binned == k) for k in range(top)] + [np.count_nonzero(binned >= top)], dtype=float)
    probs = np.append(stats.poisson.pmf(np.arange(top), lam), stats.poisson.sf(top - 1, lam))
    merged_obs, merged_exp = _merge_bins(observed, probs * n)

    if len(merged_obs) < 3:
        _, p_value = dispersion_index_test(counts)
        return "dispersion", p_value

    # one extra degree of freedom spent on estimating lambda
    _, p_value = chi_square_gof(merged_obs, np.asarray(merged_exp) / n, ddof=1)
    return "chi-square", p_value


def classify_risk(variance_ratio: float, p_value: float, options: AnalysisOptions) -> RiskLevel:
    alpha = options.effective_alpha()
    sensitivity = options.sensitivity()
    spread = abs(math.log(variance_ratio)) if variance_ratio > 0 else math.inf
    if spread > math.log(MEDIUM_DISPERSION) / sensitivity or p_value < alpha / 5:
        return RiskLevel.HIGH
    if spread > math.log(LOW_DISPERSION) / sensitivity or p_value < alpha:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def analyze_poisson(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> PoissonAnalysis:
    """
    Check whether ``values`` behave like counts from a Poisson process

    Args:
    values (np.ndarray): Extracted sample; negative values are ignored
    options (AnalysisOptions): Resolved options
    path (str): Input identifier echoed in the result

    Returns:
    PoissonAnalysis: Lambda, variance/mean ratio, goodness-of-fit p-value and verdict

    Raises:
    InsufficientData: Fewer than 2 observations or a zero mean
    """
    sample = np.asarray(values, dtype=float)
    counts = sample[sample >= 0]
    if counts.size < 2:
        raise InsufficientData(
            f'Insufficient data points for poisson analysis: need at least 2 non-negative counts, got {counts.size}'
        )

    lam = float(counts.mean())
    if lam <= 0:
        raise InsufficientData('Insufficient data points for poisson analysis: all counts are zero')

    logger.info(f'Running Poisson analysis on {counts.size} observations')

    variance_ratio = float(counts.var(ddof=1) / lam)
    method, p_value = goodness_of_fit(counts, lam)
    risk = classify_risk(variance_ratio, p_value, options)
    low_confidence = counts.size < max(LOW_CONFIDENCE_SAMPLE, options.min_sample_size)

    logger.debug(f'Poisson lambda={lam:.4f} ratio={variance_ratio:.4f} p={p_value:.4f} ({method}) risk={risk}')

    summary = (
        f"Poisson fit of {counts.size} observations: lambda {lam:.3f}, "
        f"variance ratio {variance_ratio:.3f}, {method} p={p_value:.4f}, risk {risk}"
    )
    if low_confidence:
        summary += f" (low confidence: below min_sample_size {options.min_sample_size})"

    return PoissonAnalysis(
        lambda_=lam,
        variance_ratio=variance_ratio,
        poisson_test_p=p_value,
        risk_level=risk,
        total_events=int(counts.size),
        analysis_summary=summary,
        low_confidence=low_confidence,
        path=path,
    )
