import pytest

from lawkit.config import (
    LAWS,
    AnalysisOptions,
    as_float,
    canonical_law,
    coerce_seed,
    normalize_key,
    positive_int,
    resolve_options,
)
from lawkit.results import RiskLevel
from lawkit.utils.exceptions import InvalidParameter


class TestAnalysisOptions:
    def test_defaults(self):
        options = AnalysisOptions()
        assert options.confidence_level == 0.95
        assert options.significance_level == 0.05
        assert options.laws_to_check == LAWS
        assert options.risk_threshold is None
        assert options.effective_alpha() == pytest.approx(0.05)

    def test_camel_case_keys_and_unknown_keys(self):
        options = AnalysisOptions.from_dict({
            'confidenceLevel': 0.99,
            'riskThreshold': 'high',
            'benfordDigits': 'second',
            'output_format': 'json',
        })
        assert options.confidence_level == 0.99
        assert options.risk_threshold is RiskLevel.HIGH
        assert options.benford_digits == 'second'

    def test_laws_to_check_canonical_order(self):
        options = AnalysisOptions.from_dict({'laws_to_check': ['poisson', 'benf', 'zipf']})
        assert options.laws_to_check == ('benford', 'zipf', 'poisson')

    @pytest.mark.parametrize('key, value', [
        ('confidence_level', 1.5),
        ('significance_level', -0.1),
        ('risk_threshold', 'extreme'),
        ('benford_base', 1),
        ('benford_digits', 'third'),
        ('pareto_ratio', 1.0),
        ('generate_count', 0),
        ('min_sample_size', 'many'),
        ('laws_to_check', ['benford', 'gamma']),
        ('focus', 'everything'),
        ('ignore_keys_regex', '[unclosed'),
    ])
    def test_out_of_range_values(self, key, value):
        with pytest.raises(InvalidParameter, match=key):
            AnalysisOptions.from_dict({key: value})

    def test_sensitivity_follows_risk_threshold(self):
        assert AnalysisOptions(risk_threshold=RiskLevel.LOW).effective_alpha() == pytest.approx(0.1)
        assert AnalysisOptions(risk_threshold=RiskLevel.HIGH).effective_alpha() == pytest.approx(0.025)

    def test_confidence_level_sets_alpha(self):
        assert AnalysisOptions(confidence_level=0.99).effective_alpha() == pytest.approx(0.01)
        assert AnalysisOptions.from_dict({'confidenceLevel': 0.9}).effective_alpha() == pytest.approx(0.1)
        assert AnalysisOptions(confidence_level=0.3).effective_alpha() == 0.5

    def test_explicit_significance_wins(self):
        options = AnalysisOptions.from_dict({'confidence_level': 0.99, 'significance_level': 0.2})
        assert options.effective_alpha() == pytest.approx(0.2)

    def test_key_options(self):
        options = AnalysisOptions.from_dict({'ignoreKeysRegex': '^_', 'pathFilter': 'sales'})
        assert options.ignore_keys_regex == '^_'
        assert options.path_filter == 'sales'
        assert AnalysisOptions.from_dict({'path_filter': ''}).path_filter is None

    def test_to_dict_round_trip(self):
        options = AnalysisOptions.from_dict({'risk_threshold': 'Medium', 'generate_seed': 3})
        payload = options.to_dict()
        assert payload['risk_threshold'] == 'MEDIUM'
        assert AnalysisOptions.from_dict(payload) == options


class TestResolveOptions:
    def test_operation_defaults_under_caller_options(self):
        assert resolve_options('validate').min_sample_size == 10
        assert resolve_options('validate', {'min_sample_size': 50}).min_sample_size == 50
        assert resolve_options('benford').min_sample_size == 30
        assert resolve_options('diagnose').enable_outlier_detection is True

    def test_instance_passes_through(self):
        options = AnalysisOptions(min_sample_size=3)
        assert resolve_options('validate', options) is options

    def test_generate_range_must_be_ordered(self):
        with pytest.raises(InvalidParameter):
            resolve_options('generate', {'generate_range_min': 10, 'generate_range_max': 5})


class TestNames:
    def test_normalize_key(self):
        assert normalize_key('paretoCategoryLimit') == 'pareto_category_limit'
        assert normalize_key('generate-count') == 'generate_count'

    def test_canonical_law(self):
        assert canonical_law('BENF') == 'benford'
        with pytest.raises(InvalidParameter):
            canonical_law('gamma')

    def test_shared_coercers(self):
        assert coerce_seed('seed', ' 7 ') == 7
        assert as_float('mean', '2.5') == 2.5
        with pytest.raises(InvalidParameter, match='count'):
            positive_int('count', 0)

    def test_risk_level_parse(self):
        assert RiskLevel.parse('low') is RiskLevel.LOW
        assert str(RiskLevel.HIGH) == 'HIGH'
        assert RiskLevel.LOW < RiskLevel.MEDIUM < RiskLevel.HIGH
