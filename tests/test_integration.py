import numpy as np
import pytest

from lawkit import analyze
from lawkit.config import LAWS, AnalysisOptions
from lawkit.integration import consensus_level, run_integration
from lawkit.results import IntegrationAnalysis, RiskLevel
from lawkit.utils.exceptions import InsufficientData


class TestIntegration:
    def test_multi_field_dataset(self, integration_dataset):
        results = analyze('analyze', integration_dataset)
        assert len(results) == len(LAWS) + 1
        assert [r.result_type for r in results[:-1]] == [
            'BenfordAnalysis', 'ParetoAnalysis', 'ZipfAnalysis', 'NormalAnalysis', 'PoissonAnalysis'
        ]
        summary = results[-1]
        assert isinstance(summary, IntegrationAnalysis)
        assert summary.laws_analyzed == LAWS
        assert len(summary.recommendations) > 0
        assert summary.overall_risk == max(r.risk_level for r in results[:-1])

    def test_conflicts_are_laws_off_consensus(self, integration_dataset):
        results = analyze('analyze', integration_dataset)
        summary = results[-1]
        levels = [r.risk_level for r in results[:-1]]
        consensus = consensus_level(levels)
        expected = tuple(law for law, level in zip(LAWS, levels) if level != consensus)
        assert summary.conflicting_results == expected

    def test_subset_of_laws_in_canonical_order(self, integration_dataset):
        results = analyze('analyze', integration_dataset, {'lawsToCheck': ['normal', 'benford']})
        assert [r.result_type for r in results] == ['BenfordAnalysis', 'NormalAnalysis', 'IntegrationAnalysis']
        assert results[-1].laws_analyzed == ('benford', 'normal')

    def test_parallel_matches_sequential(self, integration_dataset):
        sequential = analyze('analyze', integration_dataset)
        parallel = analyze('analyze', integration_dataset, {'enable_parallel_processing': True})
        assert [r.to_dict() for r in parallel] == [r.to_dict() for r in sequential]

    def test_laws_with_too_little_data_are_skipped(self):
        results = analyze('analyze', [-1.0, -2.0, -3.0, 4.0])
        assert [r.result_type for r in results] == ['NormalAnalysis', 'IntegrationAnalysis']
        summary = results[-1]
        assert summary.laws_analyzed == ('normal',)
        assert any('not analyzed' in note for note in summary.recommendations)

    def test_nothing_analyzable(self):
        with pytest.raises(InsufficientData):
            analyze('analyze', [-5.0])

    def test_risk_threshold_ignores_lower_verdicts(self, integration_dataset):
        values = np.array([v for group in integration_dataset['comprehensive_dataset'].values() for v in group], dtype=float)
        loose = run_integration(values, AnalysisOptions(risk_threshold=RiskLevel.HIGH))
        per_law = [r.risk_level for r in loose[:-1]]
        expected = RiskLevel.HIGH if RiskLevel.HIGH in per_law else RiskLevel.LOW
        assert loose[-1].overall_risk == expected


class TestConsensus:
    def test_majority(self):
        assert consensus_level([RiskLevel.LOW, RiskLevel.LOW, RiskLevel.HIGH]) is RiskLevel.LOW

    def test_tie_goes_to_higher_risk(self):
        assert consensus_level([RiskLevel.LOW, RiskLevel.HIGH]) is RiskLevel.HIGH
        assert consensus_level([RiskLevel.MEDIUM, RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.LOW]) is RiskLevel.MEDIUM
