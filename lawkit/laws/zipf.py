"""Zipf rank-frequency analysis."""

import numpy as np

from ..config import AnalysisOptions
from ..results import RiskLevel, ZipfAnalysis
from ..stats import log_log_fit
from ..utils.exceptions import InsufficientData
from ..utils.logger_config import setup_logger

logger = setup_logger(__name__)


def classify_risk(exponent: float, correlation: float, options: AnalysisOptions) -> RiskLevel:
    sensitivity = options.sensitivity()
    strength = abs(correlation)
    drift = abs(exponent - 1.0)
    if exponent <= 0 or strength < 1 - 0.2 / sensitivity or drift > 0.7 / sensitivity:
        return RiskLevel.HIGH
    if strength >= 1 - 0.05 / sensitivity and drift <= 0.3 / sensitivity:
        return RiskLevel.LOW
    return RiskLevel.MEDIUM


def analyze_zipf(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> ZipfAnalysis:
    sample = np.asarray(values, dtype=float)
    sample = sample[(sample > 0) & (sample > options.zipf_frequency_cutoff)]
    sample = np.sort(sample)[::-1]
    if options.zipf_rank_limit is not None:
        sample = sample[:options.zipf_rank_limit]

    if np.unique(sample).size < 2:
        raise InsufficientData(
            f'Insufficient data points for zipf analysis: need at least 2 distinct positive values, '
            f'got {np.unique(sample).size}'
        )

    logger.info(f'Running Zipf analysis on {sample.size} ranked items')

    ranks = np.arange(1, sample.size + 1)
    fit = log_log_fit(ranks, sample)
    exponent = -fit.slope
    risk = classify_risk(exponent, fit.r_value, options)
    low_confidence = sample.size < options.min_sample_size

    logger.debug(f'Zipf s={exponent:.4f} r={fit.r_value:.4f} rms={fit.rms_residual:.4f} risk={risk}')

    summary = (
        f"Zipf fit over {sample.size} ranks: exponent {exponent:.3f}, "
        f"correlation {fit.r_value:.3f}, deviation {fit.rms_residual:.3f}, risk {risk}"
    )
    if low_confidence:
        summary += f" (low confidence: below min_sample_size {options.min_sample_size})"
    return ZipfAnalysis(
        zipf_coefficient=float(exponent),
        correlation_coefficient=fit.r_value,
        deviation_score=fit.rms_residual,
        risk_level=risk,
        total_items=int(sample.size),
        analysis_summary=summary,
        low_confidence=low_confidence,
        path=path,
    )
