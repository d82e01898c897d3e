"""
Benford's law analysis of leading digits.

Digits are taken from abs(value); zeros carry no leading digit and are
dropped. Three digit modes are supported: first digit, second digit and
the first two digits together.
"""

import math
from typing import Dict, List

import numpy as np

from ..config import AnalysisOptions
from ..results import BenfordAnalysis, RiskLevel, freeze_mapping
from ..stats import chi_square_gof
from ..utils.exceptions import InsufficientData, InvalidParameter
from ..utils.logger_config import setup_logger

logger = setup_logger(__name__)

# Below this many digits MAD mostly measures sampling noise
MAD_RELIABLE_SAMPLE = 1000

# (acceptable, marginal) MAD conformity bounds
MAD_BANDS = {
    "first": (0.012, 0.015),
    "second": (0.010, 0.012),
    "first_two": (0.0018, 0.0022),
}

MODE_LABELS = {
    "first": "first-digit",
    "second": "second-digit",
    "first_two": "first-two-digit",
}


def digit_buckets(mode: str, base: int = 10) -> List[int]:
    if mode == "first":
        return list(range(1, base))
    if mode == "second":
        return list(range(0, 10))
    return list(range(10, 100))


def expected_distribution(mode: str, base: int = 10) -> Dict[int, float]:
    """Benford probabilities per bucket; they sum to 1."""
    if mode == "first":
        return {d: math.log(1 + 1 / d, base) for d in digit_buckets(mode, base)}
    if mode == "second":
        return {
            d: sum(math.log10(1 + 1 / (10 * k + d)) for k in range(1, 10))
            for d in digit_buckets(mode)
        }
    return {d: math.log10(1 + 1 / d) for d in digit_buckets(mode)}


def _leading_digit(value: float, base: int) -> int:
    exponent = math.floor(math.log(value, base))
    mantissa = value / base ** exponent
    # log() rounding can land one step off around exact powers of the base
    if mantissa >= base:
        mantissa /= base
    elif mantissa < 1:
        mantissa *= base
    return min(int(mantissa), base - 1)


def leading_digits(values: np.ndarray, mode: str = "first", base: int = 10) -> np.ndarray:
    """Digit (or two-digit) bucket of each non-zero value."""
    magnitudes = np.abs(np.asarray(values, dtype=float))
    magnitudes = magnitudes[magnitudes > 0]

    if base != 10:
        return np.array([_leading_digit(v, base) for v in magnitudes], dtype=int)

    digits = []
    for value in magnitudes:
        # scientific notation gives d.ddd... regardless of magnitude
        text = f"{value:.14e}"
        if mode == "first":
            digits.append(int(text[0]))
        elif mode == "second":
            digits.append(int(text[2]))
        else:
            digits.append(int(text[0] + text[2]))
    return np.array(digits, dtype=int)


def classify_risk(p_value: float, mad: float, total: int, mode: str, options: AnalysisOptions) -> RiskLevel:
    sensitivity = options.sensitivity()
    if total >= MAD_RELIABLE_SAMPLE:
        acceptable, marginal = MAD_BANDS[mode]
        if mad <= acceptable / sensitivity:
            return RiskLevel.LOW
        if mad <= marginal / sensitivity:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    alpha = options.effective_alpha()
    if p_value >= alpha:
        return RiskLevel.LOW
    if p_value >= alpha / 5:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def analyze_benford(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> BenfordAnalysis:
    """
    Compare the leading-digit distribution of ``values`` with Benford's law

    Args:
    values (np.ndarray): Extracted sample
    options (AnalysisOptions): Resolved options (digit mode, base, thresholds)
    path (str): Input identifier echoed in the result

    Returns:
    BenfordAnalysis: Observed counts, expected probabilities, chi-square, MAD and verdict

    Raises:
    InvalidParameter: A non-decimal base was combined with a multi-digit mode
    InsufficientData: Fewer usable digits than benford_min_digits
    """
    mode = options.benford_digits
    base = options.benford_base
    if base != 10 and mode != "first":
        raise InvalidParameter(f"Invalid parameter benford_digits: {mode} mode requires base 10, got base {base}")

    digits = leading_digits(values, mode, base)
    total = int(digits.size)
    if total < options.benford_min_digits:
        raise InsufficientData(
            f'Insufficient data points for benford analysis: need at least {options.benford_min_digits} '
            f'non-zero values, got {total}'
        )

    logger.info(f'Running Benford {MODE_LABELS[mode]} analysis on {total} numbers (base {base})')

    expected = expected_distribution(mode, base)
    buckets = list(expected)
    counts = np.array([np.count_nonzero(digits == d) for d in buckets], dtype=int)
    probs = np.array([expected[d] for d in buckets])
    probs = probs / probs.sum()

    chi_square, p_value = chi_square_gof(counts, probs)
    mad = float(np.mean(np.abs(counts / total - probs)))
    risk = classify_risk(p_value, mad, total, mode, options)
    low_confidence = total < options.min_sample_size

    logger.debug(f'Benford chi2={chi_square:.4f} p={p_value:.4f} mad={mad:.5f} risk={risk}')

    summary = (
        f"Benford {MODE_LABELS[mode]} analysis of {total} numbers: "
        f"chi-square {chi_square:.2f} (p={p_value:.4f}), MAD {mad:.4f}, risk {risk}"
    )
    if low_confidence:
        summary += f" (low confidence: below min_sample_size {options.min_sample_size})"
    return BenfordAnalysis(
        observed_distribution=freeze_mapping(zip(buckets, (int(c) for c in counts))),
        expected_distribution=freeze_mapping(zip(buckets, (float(p) for p in probs))),
        chi_square=chi_square,
        p_value=p_value,
        mad=mad,
        risk_level=risk,
        total_numbers=total,
        digit_mode=mode,
        analysis_summary=summary,
        low_confidence=low_confidence,
        path=path,
    )
