"""Result records returned by every lawkit operation.

Each operation returns a list of these frozen dataclasses. The variant is
identified by the ``result_type`` class attribute, and ``to_dict`` produces
the camelCase payload external callers serialize.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Tuple

from .utils.exceptions import InvalidParameter


class RiskLevel(enum.IntEnum):
    """Ordered risk classification. Canonical spelling is upper case."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value: Any) -> "RiskLevel":
        """Case-insensitive lookup used at the option/compatibility boundary."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        raise InvalidParameter(
            f"Invalid parameter risk_threshold: {value!r} (expected one of low, medium, high)"
        )


_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")

# Wire names that do not follow the plain snake_case -> camelCase rule.
_WIRE_NAMES = {
    "lambda_": "lambda",
    "top_20_percent_contribution": "top20PercentContribution",
}


def _camel(name: str) -> str:
    if name in _WIRE_NAMES:
        return _WIRE_NAMES[name]
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def _plain(value: Any) -> Any:
    if isinstance(value, RiskLevel):
        return str(value)
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def freeze_mapping(values: Mapping) -> Mapping:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class AnalysisResult:
    """Common base of every result variant."""

    result_type: ClassVar[str] = "AnalysisResult"

    def to_dict(self, camel_case: bool = True) -> Dict[str, Any]:
        key = _camel if camel_case else (lambda name: name.rstrip("_"))
        payload: Dict[str, Any] = {key("result_type"): self.result_type}
        for f in fields(self):
            payload[key(f.name)] = _plain(getattr(self, f.name))
        return payload


@dataclass(frozen=True)
class BenfordAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "BenfordAnalysis"

    observed_distribution: Mapping[int, int]
    expected_distribution: Mapping[int, float]
    chi_square: float
    p_value: float
    mad: float
    risk_level: RiskLevel
    total_numbers: int
    digit_mode: str
    analysis_summary: str
    low_confidence: bool = False
    path: str = "data"


@dataclass(frozen=True)
class ParetoAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "ParetoAnalysis"

    top_20_percent_contribution: float
    pareto_ratio: float
    concentration_index: float
    risk_level: RiskLevel
    total_items: int
    analysis_summary: str
    low_confidence: bool = False
    path: str = "data"


@dataclass(frozen=True)
class ZipfAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "ZipfAnalysis"

    zipf_coefficient: float
    correlation_coefficient: float
    deviation_score: float
    risk_level: RiskLevel
    total_items: int
    analysis_summary: str
    low_confidence: bool = False
    path: str = "data"


@dataclass(frozen=True)
class NormalAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "NormalAnalysis"

    mean: float
    std_dev: float
    skewness: float
    kurtosis: float
    normality_test_p: float
    risk_level: RiskLevel
    total_numbers: int
    analysis_summary: str
    outliers: Tuple[float, ...] = ()
    low_confidence: bool = False
    path: str = "data"


@dataclass(frozen=True)
class PoissonAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "PoissonAnalysis"

    lambda_: float
    variance_ratio: float
    poisson_test_p: float
    risk_level: RiskLevel
    total_events: int
    analysis_summary: str
    low_confidence: bool = False
    path: str = "data"


@dataclass(frozen=True)
class IntegrationAnalysis(AnalysisResult):
    result_type: ClassVar[str] = "IntegrationAnalysis"

    laws_analyzed: Tuple[str, ...]
    overall_risk: RiskLevel
    conflicting_results: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    analysis_summary: str
    path: str = "data"


@dataclass(frozen=True)
class ValidationResult(AnalysisResult):
    result_type: ClassVar[str] = "ValidationResult"

    validation_passed: bool
    issues_found: Tuple[str, ...]
    data_quality_score: float
    analysis_summary: str
    path: str = "data"


@dataclass(frozen=True)
class DiagnosticResult(AnalysisResult):
    result_type: ClassVar[str] = "DiagnosticResult"

    diagnostic_type: str
    findings: Tuple[str, ...]
    confidence_level: float
    analysis_summary: str
    outliers: Tuple[float, ...] = ()
    path: str = "data"


@dataclass(frozen=True)
class GeneratedData(AnalysisResult):
    result_type: ClassVar[str] = "GeneratedData"

    data_type: str
    count: int
    parameters: Mapping[str, Any]
    sample_data: Tuple[float, ...]
    analysis_summary: str
    path: str = "generated"


LAW_RESULT_TYPES = {
    "benford": BenfordAnalysis,
    "pareto": ParetoAnalysis,
    "zipf": ZipfAnalysis,
    "normal": NormalAnalysis,
    "poisson": PoissonAnalysis,
}


__all__ = [
    "RiskLevel",
    "AnalysisResult",
    "BenfordAnalysis",
    "ParetoAnalysis",
    "ZipfAnalysis",
    "NormalAnalysis",
    "PoissonAnalysis",
    "IntegrationAnalysis",
    "ValidationResult",
    "DiagnosticResult",
    "GeneratedData",
    "LAW_RESULT_TYPES",
    "freeze_mapping",
]
