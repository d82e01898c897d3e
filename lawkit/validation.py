"""
Data quality validation.

Problems with the data itself are reported inside the ValidationResult,
never raised. Each check adds either a critical issue (fails validation)
or a warning (lowers the quality score only).
"""

from typing import List, Tuple

import numpy as np

from .config import AnalysisOptions
from .results import ValidationResult
from .stats import describe_sample, robust_zscores
from .utils.logger_config import setup_logger

logger = setup_logger(__name__)

CRITICAL_PENALTY = 0.3
WARNING_PENALTY = 0.1

DUPLICATE_CRITICAL = 0.5
DUPLICATE_WARNING = 0.3
ZERO_SHARE_WARNING = 0.5
ROUNDING_SHARE_WARNING = 0.5
EXTREME_ROBUST_Z = 10.0


class DataValidator:
    """
    Runs the data quality checks over one extracted sample.

    Attributes:
    options (AnalysisOptions): Resolved options (min_sample_size is the size floor)
    critical (list): Issues that fail validation
    warnings (list): Issues that only lower the quality score
    """

    def __init__(self, options: AnalysisOptions) -> None:
        self.options = options
        self.critical: List[str] = []
        self.warnings: List[str] = []

    def _check_size(self, sample: np.ndarray) -> None:
        if sample.size < self.options.min_sample_size:
            self.critical.append(
                f'Sample size {sample.size} is below the minimum of {self.options.min_sample_size}'
            )

    def _check_variation(self, sample: np.ndarray) -> bool:
        if sample.size > 1 and np.ptp(sample) == 0:
            self.critical.append(f'All {sample.size} values are identical ({sample[0]:g})')
            return False
        return True

    def _check_duplicates(self, sample: np.ndarray) -> None:
        ratio = float(describe_sample(sample)['duplicate_ratio'])
        if ratio > DUPLICATE_CRITICAL:
            self.critical.append(f'Duplicate ratio {ratio:.1%} exceeds {DUPLICATE_CRITICAL:.0%}')
        elif ratio > DUPLICATE_WARNING:
            self.warnings.append(f'Duplicate ratio {ratio:.1%} exceeds {DUPLICATE_WARNING:.0%}')

    def _check_signs(self, sample: np.ndarray) -> None:
        negatives = int(np.count_nonzero(sample < 0))
        if negatives:
            self.warnings.append(f'{negatives} negative values found')
        zero_share = float(np.mean(sample == 0))
        if zero_share > ZERO_SHARE_WARNING:
            self.warnings.append(f'{zero_share:.1%} of values are zero')

    def _check_rounding(self, sample: np.ndarray) -> None:
        integers = sample[(sample == np.floor(sample)) & (np.abs(sample) >= 10)]
        if integers.size == 0:
            return
        share = float(np.mean(integers % 10 == 0))
        if share > ROUNDING_SHARE_WARNING:
            self.warnings.append(f'{share:.1%} of integer values are multiples of 10 (possible rounding)')

    def _check_extremes(self, sample: np.ndarray) -> None:
        if sample.size < 3:
            return
        extreme = int(np.count_nonzero(np.abs(robust_zscores(sample)) > EXTREME_ROBUST_Z))
        if extreme:
            self.warnings.append(f'{extreme} extreme outliers (robust z-score above {EXTREME_ROBUST_Z:g})')

    def validate(self, sample: np.ndarray, skipped: int = 0) -> Tuple[bool, Tuple[str, ...], float]:
        """
        Run every check in order

        Args:
        sample (np.ndarray): Extracted sample
        skipped (int): Entries the extractor could not use

        Returns:
        Tuple[bool, Tuple[str, ...], float]: passed flag, issues (critical first) and quality score
        """
        self.critical = []
        self.warnings = []

        self._check_size(sample)
        if self._check_variation(sample):
            self._check_duplicates(sample)
        self._check_signs(sample)
        if skipped:
            self.warnings.append(f'{skipped} non-numeric or non-finite entries were skipped')
        self._check_rounding(sample)
        self._check_extremes(sample)

        score = 1.0 - CRITICAL_PENALTY * len(self.critical) - WARNING_PENALTY * len(self.warnings)
        score = float(np.clip(score, 0.0, 1.0))
        return not self.critical, tuple(self.critical + self.warnings), score


def validate_sample(values: np.ndarray, options: AnalysisOptions, skipped: int = 0, path: str = "data") -> ValidationResult:
    sample = np.asarray(values, dtype=float)
    logger.info(f'Validating {sample.size} values')

    passed, issues, score = DataValidator(options).validate(sample, skipped)

    logger.debug(f'Validation passed={passed} issues={len(issues)} score={score:.2f}')

    if passed:
        summary = f"Validation passed for {sample.size} values with quality score {score:.2f}"
    else:
        summary = f"Validation failed for {sample.size} values: {issues[0]}"
    if issues:
        summary += f" ({len(issues)} issues)"

    return ValidationResult(
        validation_passed=passed,
        issues_found=issues,
        data_quality_score=score,
        analysis_summary=summary,
        path=path,
    )
