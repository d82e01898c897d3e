"""
Multi-law integration.

Runs the requested law analyzers over one sample, then summarizes them in
an IntegrationAnalysis: the worst verdict, laws that disagree with the
consensus, false-discovery-rate control across the p-value based laws and
a list of recommendations.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import AnalysisOptions
from .laws import ANALYZERS
from .results import AnalysisResult, IntegrationAnalysis, RiskLevel
from .stats import fdr_correction
from .utils.exceptions import InsufficientData
from .utils.logger_config import setup_logger

logger = setup_logger(__name__)

# Result attribute holding the p-value of each p-value based law
P_VALUE_FIELDS = {
    "benford": "p_value",
    "normal": "normality_test_p",
    "poisson": "poisson_test_p",
}

RECOMMENDATIONS = {
    "benford": "Benford: leading digits deviate from the expected distribution; audit the records for fabricated or altered figures",
    "pareto": "Pareto: concentration departs from the 80/20 pattern; check whether a few items dominate or the spread is unusually even",
    "zipf": "Zipf: rank-frequency decay is not a clean power law; look for truncated, merged or padded categories",
    "normal": "Normal: the sample is not normally distributed; prefer robust or non-parametric methods",
    "poisson": "Poisson: counts are over- or under-dispersed; consider a negative binomial or zero-inflated model",
}


def _run_law(law: str, values: np.ndarray, options: AnalysisOptions, path: str) -> Tuple[str, Optional[AnalysisResult], Optional[str]]:
    try:
        return law, ANALYZERS[law](values, options, path), None
    except InsufficientData as e:
        logger.info(f'Skipping {law} in integrated analysis : {str(e)}')
        return law, None, str(e)


def consensus_level(levels: List[RiskLevel]) -> RiskLevel:
    """Most common verdict; ties resolve to the higher risk."""
    tally = Counter(levels)
    return max(tally, key=lambda level: (tally[level], level))


def _recommendations(verdicts: Dict[str, RiskLevel], skipped: List[Tuple[str, str]], conflicts: Tuple[str, ...], fdr_rejected: List[str]) -> Tuple[str, ...]:
    notes: List[str] = []
    flagged = sorted(
        (law for law, level in verdicts.items() if level > RiskLevel.LOW),
        key=lambda law: -verdicts[law],
    )
    for law in flagged:
        notes.append(f"[{verdicts[law]}] {RECOMMENDATIONS[law]}")
    if fdr_rejected:
        notes.append(
            "After false discovery rate control the deviation remains significant for: " + ", ".join(fdr_rejected)
        )
    if conflicts:
        notes.append(
            "Laws disagree on the risk (" + ", ".join(conflicts) + "); weigh each result against how the data was produced"
        )
    for law, reason in skipped:
        notes.append(f"{law}: not analyzed ({reason})")
    if not flagged:
        notes.insert(0, "All analyzed laws are consistent with the data; no follow-up needed")
    return tuple(notes)


def run_integration(values: np.ndarray, options: AnalysisOptions, path: str = "data") -> List[AnalysisResult]:
    """
    Analyze ``values`` with every law in ``options.laws_to_check``

    Args:
    values (np.ndarray): Extracted sample
    options (AnalysisOptions): Resolved options; enable_parallel_processing uses a thread pool
    path (str): Input identifier echoed in every result

    Returns:
    List[AnalysisResult]: Per-law analyses in canonical law order, then the IntegrationAnalysis

    Raises:
    InsufficientData: None of the requested laws could be analyzed
    """
    laws = options.laws_to_check
    logger.info(f'Running integrated analysis of {len(laws)} laws on {len(values)} values')

    def run(law: str):
        return _run_law(law, values, options, path)

    if options.enable_parallel_processing and len(laws) > 1:
        # map() yields in submission order
        with ThreadPoolExecutor(max_workers=len(laws)) as pool:
            outcomes = list(pool.map(run, laws))
    else:
        outcomes = [run(law) for law in laws]

    results = [result for _, result, _ in outcomes if result is not None]
    skipped = [(law, reason) for law, result, reason in outcomes if result is None]
    if not results:
        reasons = "; ".join(reason for _, reason in skipped)
        raise InsufficientData(f'Insufficient data points for integrated analysis: no law could be analyzed ({reasons})')

    verdicts = {law: result.risk_level for law, result, _ in outcomes if result is not None}
    threshold = options.risk_threshold
    counted = [
        level if threshold is None or level >= threshold else RiskLevel.LOW
        for level in verdicts.values()
    ]
    overall = max(counted)

    consensus = consensus_level(list(verdicts.values()))
    conflicts = tuple(law for law, level in verdicts.items() if level != consensus)

    tested = [(law, getattr(result, P_VALUE_FIELDS[law])) for law, result, _ in outcomes
              if result is not None and law in P_VALUE_FIELDS]
    fdr_rejected: List[str] = []
    if tested:
        correction = fdr_correction([p for _, p in tested], alpha=options.effective_alpha())
        fdr_rejected = [law for (law, _), rejected in zip(tested, correction["rejected"]) if rejected]
        logger.debug(f'FDR q-values: {dict(zip([law for law, _ in tested], correction["q_values"]))}')

    recommendations = _recommendations(verdicts, skipped, conflicts, fdr_rejected)

    summary = (
        f"Integrated analysis of {len(verdicts)} laws: overall risk {overall}, consensus {consensus}"
        + (f", conflicting: {', '.join(conflicts)}" if conflicts else "")
    )
    logger.info(summary)

    results.append(IntegrationAnalysis(
        laws_analyzed=tuple(verdicts),
        overall_risk=overall,
        conflicting_results=conflicts,
        recommendations=recommendations,
        analysis_summary=summary,
        path=path,
    ))
    return results
