"""Pareto (80/20) concentration analysis."""

import math

import numpy as np

from ..config import AnalysisOptions
from ..results import ParetoAnalysis, RiskLevel
from ..stats import gini_coefficient
from ..utils.exceptions import InsufficientData
from ..utils.logger_config import setup_logger

logger = setup_logger(__name__)

TARGET_SHARE = 80.0

# Distance from the target share (in percentage points) tolerated below / above it
LOW_BAND = (15.0, 10.0)
MEDIUM_BAND = (30.0, 17.0)


def top_share(sorted_desc: np.ndarray, fraction: float = 0.2) -> float:
    """Percentage of the total held by the top ``fraction`` of items (at least one)."""
    total = sorted_desc.sum()
    if total <= 0:
        return 0.0
    top_n = max(1, math.floor(fraction * sorted_desc.size))
    return float(100.0 * sorted_desc[:top_n].sum() / total)


def items_for_share(sorted_desc: np.ndarray, share: float) -> float:
    """Smallest fraction of items whose cumulative value reaches ``share`` of the total."""
    total = sorted_desc.sum()
    if total <= 0:
        return 1.0
    cumulative = np.cumsum(sorted_desc)
    k = int(np.searchsorted(cumulative, share * total * (1 - 1e-12), side="left")) + 1
    return min(k, sorted_desc.size) / sorted_desc.size


def classify_risk(contribution: float, options: AnalysisOptions) -> RiskLevel:
    sensitivity = options.sensitivity()
    below = TARGET_SHARE - contribution
    above = contribution - TARGET_SHARE
    if below <= LOW_BAND[0] / sensitivity and above <= LOW_BAND[1] / sensitivity:
        return RiskLevel.LOW
    if below <= MEDIUM_BAND[0] / sensitivity and above <= MEDIUM_BAND[1] / sensitivity:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def analyze_pareto(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> ParetoAnalysis:
    """
    Measure how strongly the total is concentrated in the largest items

    Args:
    values (np.ndarray): Extracted sample; negative values are ignored
    options (AnalysisOptions): Resolved options (pareto_ratio, pareto_category_limit)
    path (str): Input identifier echoed in the result

    Returns:
    ParetoAnalysis: Top-20% share, Pareto ratio, Gini concentration and verdict

    Raises:
    InsufficientData: Fewer than 2 non-negative values
    """
    sample = np.asarray(values, dtype=float)
    dropped = int(np.count_nonzero(sample < 0))
    sample = np.sort(sample[sample >= 0])[::-1]
    if options.pareto_category_limit is not None:
        sample = sample[:options.pareto_category_limit]

    if sample.size < 2:
        raise InsufficientData(
            f'Insufficient data points for pareto analysis: need at least 2 non-negative values, got {sample.size}'
        )
    if dropped:
        logger.debug(f'Pareto analysis ignored {dropped} negative values')

    logger.info(f'Running Pareto analysis on {sample.size} items')

    contribution = top_share(sample)
    ratio = items_for_share(sample, options.pareto_ratio)
    concentration = gini_coefficient(sample)
    risk = classify_risk(contribution, options)
    low_confidence = sample.size < options.min_sample_size

    logger.debug(f'Pareto top20={contribution:.2f}% ratio={ratio:.3f} gini={concentration:.3f} risk={risk}')

    summary = (
        f"Top 20% of {sample.size} items hold {contribution:.1f}% of the total; "
        f"{ratio:.0%} of items reach {options.pareto_ratio:.0%} of it "
        f"(concentration {concentration:.3f}), risk {risk}"
    )
    if low_confidence:
        summary += f" (low confidence: below min_sample_size {options.min_sample_size})"
    return ParetoAnalysis(
        top_20_percent_contribution=contribution,
        pareto_ratio=ratio,
        concentration_index=concentration,
        risk_level=risk,
        total_items=int(sample.size),
        analysis_summary=summary,
        low_confidence=low_confidence,
        path=path,
    )
