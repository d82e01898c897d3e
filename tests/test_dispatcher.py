import pytest

import lawkit
from lawkit import analyze, law, list_laws
from lawkit.utils.exceptions import InsufficientData, InvalidParameter, NoValidNumbers, UnknownSubcommand


class TestDispatch:
    def test_unknown_subcommand(self):
        with pytest.raises(UnknownSubcommand, match='Unknown subcommand'):
            analyze('unknown', [1, 2, 3])

    def test_error_paths(self):
        with pytest.raises(NoValidNumbers, match='No valid numbers found'):
            analyze('benford', [])
        with pytest.raises(InsufficientData, match='Insufficient data points'):
            analyze('normal', [1, 2])

    def test_case_insensitive_and_aliases(self, benford_compliant):
        expected = analyze('benford', benford_compliant)[0].to_dict()
        assert analyze('BENFORD', benford_compliant)[0].to_dict() == expected
        assert analyze('benf', benford_compliant)[0].to_dict() == expected
        assert law('Benford', benford_compliant)[0].to_dict() == expected

    def test_invalid_option_value(self):
        with pytest.raises(InvalidParameter):
            analyze('benford', [123, 234, 345, 456, 567], {'confidence_level': 2})

    def test_camel_case_and_unknown_options(self):
        data = [123, 234, 345, 456, 567, 678, 789, 890, 901]
        assert len(analyze('benford', data, {'confidenceLevel': 0.99})) == 1
        assert len(analyze('benford', data, {'riskThreshold': 'high'})) == 1
        assert len(analyze('validate', [1, 2, 3], {'output_format': 'json'})) == 1

    @pytest.mark.parametrize('operation', ['benford', 'pareto', 'zipf', 'normal', 'poisson', 'analyze', 'validate', 'diagnose'])
    def test_idempotent(self, operation, integration_dataset):
        first = [r.to_dict() for r in analyze(operation, integration_dataset)]
        second = [r.to_dict() for r in analyze(operation, integration_dataset)]
        assert first == second

    def test_list_laws(self):
        laws = list_laws()
        assert [entry['name'] for entry in laws] == list(lawkit.LAWS)
        assert laws[0]['result_type'] == 'BenfordAnalysis'
        assert all(entry['description'] for entry in laws)


class TestSerialization:
    def test_benford_wire_shape(self, benford_compliant):
        payload = analyze('benford', benford_compliant)[0].to_dict()
        assert payload['resultType'] == 'BenfordAnalysis'
        assert payload['riskLevel'] in ('LOW', 'MEDIUM')
        assert set(payload['observedDistribution']) == {str(d) for d in range(1, 10)}
        assert isinstance(payload['chiSquare'], float)
        assert payload['path'] == 'data'

    def test_special_field_names(self, pareto_compliant, poisson_counts):
        pareto = analyze('pareto', pareto_compliant)[0].to_dict()
        assert 'top20PercentContribution' in pareto
        poisson = analyze('poisson', poisson_counts)[0].to_dict()
        assert poisson['lambda'] == pytest.approx(1.7)
        assert 'varianceRatio' in poisson

    def test_snake_case_payload(self, poisson_counts):
        payload = analyze('poisson', poisson_counts)[0].to_dict(camel_case=False)
        assert payload['result_type'] == 'PoissonAnalysis'
        assert 'lambda' in payload
        assert 'variance_ratio' in payload

    def test_results_are_immutable(self, benford_compliant):
        result = analyze('benford', benford_compliant)[0]
        with pytest.raises(AttributeError):
            result.chi_square = 0.0
        with pytest.raises(TypeError):
            result.observed_distribution[1] = 0
