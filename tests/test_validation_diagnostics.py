import numpy as np
import pytest

from lawkit import analyze
from lawkit.config import AnalysisOptions
from lawkit.diagnostics import diagnose_sample, find_outliers
from lawkit.results import DiagnosticResult, ValidationResult
from lawkit.validation import validate_sample


class TestValidation:
    def test_valid_dataset_passes(self, valid_dataset):
        results = analyze('validate', valid_dataset)
        assert len(results) == 1
        result = results[0]
        assert isinstance(result, ValidationResult)
        assert result.validation_passed is True
        assert result.data_quality_score == pytest.approx(1.0)

    def test_small_dataset_fails(self, small_dataset):
        result = analyze('validate', small_dataset)[0]
        assert result.validation_passed is False
        assert len(result.issues_found) > 0
        assert 'below the minimum' in result.issues_found[0]
        assert result.data_quality_score < 1.0

    def test_min_sample_size_option(self, small_dataset):
        result = analyze('validate', small_dataset, {'minSampleSize': 3})[0]
        assert result.validation_passed is True

    def test_identical_values_are_critical(self):
        result = validate_sample(np.full(20, 7.0), AnalysisOptions(min_sample_size=10))
        assert result.validation_passed is False
        assert any('identical' in issue for issue in result.issues_found)
        assert result.data_quality_score == pytest.approx(0.7)

    def test_warnings_lower_score_without_failing(self):
        values = np.array([-3.0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 15, 25.5])
        result = validate_sample(values, AnalysisOptions(min_sample_size=10), skipped=2)
        assert result.validation_passed is True
        issues = ' '.join(result.issues_found)
        assert 'negative' in issues
        assert 'skipped' in issues
        assert 'multiples of 10' in issues
        assert result.data_quality_score == pytest.approx(0.7)

    def test_duplicates(self):
        values = np.array([1.0, 1, 1, 1, 1, 2, 3, 4, 5, 6])
        result = validate_sample(values, AnalysisOptions(min_sample_size=5))
        assert any('Duplicate ratio' in issue for issue in result.issues_found)
        assert result.validation_passed is True

    def test_skipped_entries_counted_from_input(self, valid_dataset):
        result = analyze('validate', valid_dataset + ['n/a', None, True])[0]
        assert any('2 non-numeric' in issue for issue in result.issues_found)

    def test_never_raises_for_single_value(self):
        result = analyze('validate', [42])[0]
        assert result.validation_passed is False
        assert 0.0 <= result.data_quality_score <= 1.0


class TestDiagnostics:
    def test_general_diagnostics(self, normal_with_outliers):
        results = analyze('diagnose', normal_with_outliers)
        assert len(results) == 1
        result = results[0]
        assert isinstance(result, DiagnosticResult)
        assert result.diagnostic_type == 'General'
        assert len(result.findings) > 0
        assert 0.0 < result.confidence_level <= 1.0
        assert set(result.outliers) == {150.0, 50.0}

    def test_confidence_grows_with_sample(self):
        small = diagnose_sample(np.arange(10.0), AnalysisOptions())
        large = diagnose_sample(np.arange(400.0), AnalysisOptions())
        assert small.confidence_level == pytest.approx(0.55)
        assert large.confidence_level == 1.0

    def test_single_value_and_constant_data(self):
        single = analyze('diagnose', [5.0])[0]
        assert single.findings
        assert single.outliers == ()
        constant = analyze('diagnose', [3.0] * 20)[0]
        assert constant.findings[-1] == 'Data health: POOR'

    @pytest.mark.parametrize('focus, title', [('outliers', 'Outliers'), ('distribution', 'Distribution')])
    def test_focus(self, normal_with_outliers, focus, title):
        result = analyze('diagnose', normal_with_outliers, {'focus': focus})[0]
        assert result.diagnostic_type == title
        assert result.findings[-1].startswith('Data health:')

    def test_find_outliers(self):
        values = np.array([10.0, 11, 12, 11, 10, 12, 11, 95])
        assert find_outliers(values).tolist() == [95.0]
