"""Statistical helper utilities for lawkit analyzers."""

from .analysis_utils import (
    as_sample,
    normality_test,
    shape_moments,
    chi_square_gof,
    gini_coefficient,
    LogLogFit,
    log_log_fit,
    iqr_fence,
    robust_zscores,
    dispersion_index_test,
    describe_sample,
    fdr_correction,
)

__all__ = [
    'as_sample',
    'normality_test',
    'shape_moments',
    'chi_square_gof',
    'gini_coefficient',
    'LogLogFit',
    'log_log_fit',
    'iqr_fence',
    'robust_zscores',
    'dispersion_index_test',
    'describe_sample',
    'fdr_correction',
]
