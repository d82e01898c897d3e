"""Normal distribution conformity analysis."""

import numpy as np

from ..config import AnalysisOptions
from ..results import NormalAnalysis, RiskLevel
from ..stats import normality_test, shape_moments
from ..utils.exceptions import InsufficientData
from ..utils.logger_config import setup_logger

logger = setup_logger(__name__)

MIN_POINTS = 3
OUTLIER_Z = 3.0


def classify_risk(skewness: float, kurtosis: float, p_value: float, options: AnalysisOptions) -> RiskLevel:
    alpha = options.effective_alpha()
    sensitivity = options.sensitivity()
    if abs(skewness) > 2 / sensitivity or abs(kurtosis) > 7 / sensitivity or p_value < alpha / 5:
        return RiskLevel.HIGH
    if abs(skewness) > 1 / sensitivity or abs(kurtosis) > 3 / sensitivity or p_value < alpha:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def analyze_normal(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> NormalAnalysis:
    """
    Test ``values`` for normality and summarize its moments

    Args:
    values (np.ndarray): Extracted sample
    options (AnalysisOptions): Resolved options
    path (str): Input identifier echoed in the result

    Returns:
    NormalAnalysis: Mean, sample standard deviation, shape, normality p-value and verdict

    Raises:
    InsufficientData: Fewer than 3 values
    """
    sample = np.asarray(values, dtype=float)
    if sample.size < MIN_POINTS:
        raise InsufficientData(
            f'Insufficient data points for normal analysis: need at least {MIN_POINTS}, got {sample.size}'
        )

    logger.info(f'Running normality analysis on {sample.size} numbers')

    mean = float(sample.mean())
    std_dev = float(sample.std(ddof=1))
    skewness, kurtosis = shape_moments(sample)

    if std_dev == 0:
        logger.warning('Normal analysis received a constant sample')
        method, p_value = "constant", 0.0
        risk = RiskLevel.HIGH
    else:
        method, _, p_value = normality_test(sample)
        risk = classify_risk(skewness, kurtosis, p_value, options)

    outliers = ()
    if options.enable_outlier_detection and std_dev > 0:
        z_scores = np.abs((sample - mean) / std_dev)
        outliers = tuple(float(v) for v in sample[z_scores > OUTLIER_Z])

    logger.debug(f'Normal mean={mean:.4f} sd={std_dev:.4f} skew={skewness:.3f} kurt={kurtosis:.3f} p={p_value:.4f} ({method})')

    summary = (
        f"Normality ({method}) of {sample.size} numbers: mean {mean:.3f}, sd {std_dev:.3f}, "
        f"skewness {skewness:.3f}, kurtosis {kurtosis:.3f}, p={p_value:.4f}, risk {risk}"
    )
    if outliers:
        summary += f"; {len(outliers)} outliers beyond {OUTLIER_Z:g} sd"
    low_confidence = sample.size < options.min_sample_size
    if low_confidence:
        summary += f" (low confidence: below min_sample_size {options.min_sample_size})"

    return NormalAnalysis(
        mean=mean,
        std_dev=std_dev,
        skewness=skewness,
        kurtosis=kurtosis,
        normality_test_p=p_value,
        risk_level=risk,
        total_numbers=int(sample.size),
        analysis_summary=summary,
        outliers=outliers,
        low_confidence=low_confidence,
        path=path,
    )
