"""
Single entry point of lawkit.

``analyze(operation, data_or_config, options)`` resolves options, extracts
numbers and hands them to the component behind ``operation``. Every
operation returns a list of result records.
"""

from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .config import LAWS, AnalysisOptions, resolve_options
from .diagnostics import diagnose_sample
from .extraction import NumericExtractor
from .generation import generate_data
from .integration import run_integration
from .laws import ANALYZERS, DESCRIPTIONS
from .results import LAW_RESULT_TYPES, AnalysisResult, RiskLevel, ValidationResult
from .utils.exceptions import UnknownSubcommand
from .utils.logger_config import setup_logger
from .validation import validate_sample

logger = setup_logger(__name__)

OPERATION_ALIASES = {
    "benf": "benford",
    "law": "analyze",
    "integrate": "analyze",
}

DATA_PATH = "data"


def _single_law(law: str) -> Callable[[Any, AnalysisOptions], List[AnalysisResult]]:
    def run(data: Any, options: AnalysisOptions) -> List[AnalysisResult]:
        values = NumericExtractor(options).extract(data)
        return [ANALYZERS[law](values, options, DATA_PATH)]
    run.__name__ = f"run_{law}"
    return run


def _run_analyze(data: Any, options: AnalysisOptions) -> List[AnalysisResult]:
    values = NumericExtractor(options).extract(data)
    return run_integration(values, options, DATA_PATH)


def _run_validate(data: Any, options: AnalysisOptions) -> List[AnalysisResult]:
    extractor = NumericExtractor(options)
    values = extractor.extract(data)
    return [validate_sample(values, options, skipped=extractor.skipped, path=DATA_PATH)]


def _run_diagnose(data: Any, options: AnalysisOptions) -> List[AnalysisResult]:
    values = NumericExtractor(options).extract(data)
    return [diagnose_sample(values, options, DATA_PATH)]


def _run_generate(config: Any, options: AnalysisOptions) -> List[AnalysisResult]:
    return [generate_data(config, options)]


def _run_selftest(_: Any, options: AnalysisOptions) -> List[AnalysisResult]:
    """Generate a seeded sample per law, analyze it and check none comes back HIGH."""
    results: List[AnalysisResult] = []
    failures = []
    for law in options.laws_to_check:
        generated = generate_data({"type": law}, options, path=f"selftest:{law}")
        analysis = ANALYZERS[law](np.asarray(generated.sample_data), options, f"selftest:{law}")
        results.append(analysis)
        if analysis.risk_level == RiskLevel.HIGH:
            failures.append(f"{law}: generated sample was classified HIGH ({analysis.analysis_summary})")

    checked = len(options.laws_to_check)
    passed = not failures
    results.append(ValidationResult(
        validation_passed=passed,
        issues_found=tuple(failures),
        data_quality_score=(checked - len(failures)) / checked,
        analysis_summary=f"Self-test {'passed' if passed else 'failed'}: {checked - len(failures)}/{checked} laws round-trip",
        path="selftest",
    ))
    return results


OPERATIONS: Dict[str, Callable[[Any, AnalysisOptions], List[AnalysisResult]]] = {
    **{law: _single_law(law) for law in LAWS},
    "analyze": _run_analyze,
    "validate": _run_validate,
    "diagnose": _run_diagnose,
    "generate": _run_generate,
    "selftest": _run_selftest,
}


def analyze(operation: str, data_or_config: Any = None, options: Optional[Any] = None) -> List[AnalysisResult]:
    """
    Run one lawkit operation

    Args:
    operation (str): benford (benf), pareto, zipf, normal, poisson, analyze, validate,
        diagnose, generate or selftest; matched case-insensitively
    data_or_config (Any): Numeric-bearing data, or the generation config for ``generate``
    options (Any): Mapping (snake_case or camelCase keys) or AnalysisOptions

    Returns:
    List[AnalysisResult]: One result for single-law operations, per-law results plus an
        IntegrationAnalysis for ``analyze``

    Raises:
    UnknownSubcommand: ``operation`` is not recognized
    NoValidNumbers, InsufficientData, InvalidParameter: see the individual components
    """
    name = str(operation).strip().lower()
    name = OPERATION_ALIASES.get(name, name)
    handler = OPERATIONS.get(name)
    if handler is None:
        raise UnknownSubcommand(f'Unknown subcommand: {operation!r} (expected one of {", ".join(OPERATIONS)})')

    resolved = resolve_options(name, options)
    logger.info(f'Running {name}')
    results = handler(data_or_config, resolved)
    logger.debug(f'{name} produced {len(results)} results')
    return results


law = analyze


def list_laws() -> List[Dict[str, str]]:
    """Name, result type and a one-line description of every law."""
    return [
        {"name": name, "result_type": LAW_RESULT_TYPES[name].result_type, "description": DESCRIPTIONS[name]}
        for name in LAWS
    ]
