"""Descriptive diagnostics: location, spread, outliers, shape and an overall health grade."""

from typing import List, Optional

import numpy as np

from .config import AnalysisOptions
from .results import DiagnosticResult
from .stats import describe_sample, iqr_fence, normality_test, robust_zscores, shape_moments
from .utils.logger_config import setup_logger

logger = setup_logger(__name__)

ROBUST_Z_OUTLIER = 3.5
SMALL_SAMPLE = 30


def _fmt(value: float) -> str:
    return "n/a" if value is None or not np.isfinite(value) else f"{value:.4g}"


def find_outliers(sample: np.ndarray) -> np.ndarray:
    """Values outside the 1.5*IQR fence or with a robust z-score above 3.5."""
    if sample.size < 4:
        return sample[:0]
    low, high = iqr_fence(sample)
    flagged = (sample < low) | (sample > high) | (np.abs(robust_zscores(sample)) > ROBUST_Z_OUTLIER)
    return sample[flagged]


def diagnose_sample(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> DiagnosticResult:
    """
    Build a list of human-readable findings about ``values``

    Args:
    values (np.ndarray): Extracted sample (a single value is fine)
    options (AnalysisOptions): Resolved options; ``focus`` narrows the findings
    path (str): Input identifier echoed in the result

    Returns:
    DiagnosticResult: Findings, confidence and detected outliers
    """
    sample = np.asarray(values, dtype=float)
    focus: Optional[str] = options.focus or "general"
    n = int(sample.size)
    summary_stats = describe_sample(sample)
    constant = n > 1 and np.ptp(sample) == 0

    logger.info(f'Running {focus} diagnostics on {n} values')

    findings: List[str] = [f"Sample size: {n} values" + (" (small sample)" if n < SMALL_SAMPLE else "")]

    if focus in ("general", "distribution"):
        findings.append(
            f"Location: mean {_fmt(summary_stats['mean'])}, median {_fmt(summary_stats['median'])}; "
            f"spread: sd {_fmt(summary_stats['std'])}, range [{_fmt(summary_stats['min'])}, {_fmt(summary_stats['max'])}]"
        )

    outliers = sample[:0]
    if focus == "outliers" or options.enable_outlier_detection:
        outliers = find_outliers(sample)
        if outliers.size:
            shown = ", ".join(_fmt(v) for v in outliers[:5])
            findings.append(f"Outliers: {outliers.size} values outside the IQR fence or robust z > {ROBUST_Z_OUTLIER:g} ({shown})")
        else:
            findings.append("Outliers: none detected")

    skewness, kurtosis = shape_moments(sample)
    jb_p = None
    if focus in ("general", "distribution"):
        if n >= 3 and not constant:
            _, _, jb_p = normality_test(sample, method="jarque_bera")
            findings.append(
                f"Shape: skewness {skewness:.3f}, excess kurtosis {kurtosis:.3f}, Jarque-Bera p={jb_p:.4f}"
            )
        else:
            findings.append("Shape: too few distinct values to assess")

    outlier_share = outliers.size / n if n else 0.0
    if n < 10 or constant or outlier_share > 0.1:
        grade = "POOR"
    elif outliers.size or abs(skewness) > 1 or (jb_p is not None and jb_p < options.significance_level):
        grade = "FAIR"
    else:
        grade = "GOOD"
    findings.append(f"Data health: {grade}")

    confidence = float(min(1.0, 0.5 + n / 200))
    diagnostic_type = focus.title()

    logger.debug(f'Diagnostics grade={grade} outliers={outliers.size} confidence={confidence:.2f}')

    return DiagnosticResult(
        diagnostic_type=diagnostic_type,
        findings=tuple(findings),
        confidence_level=confidence,
        analysis_summary=f"{diagnostic_type} diagnostics of {n} values: health {grade}, {outliers.size} outliers",
        outliers=tuple(float(v) for v in outliers),
        path=path,
    )
