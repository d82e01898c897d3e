"""lawkit: statistical law analysis (Benford, Pareto, Zipf, Normal, Poisson)."""

from .config import AnalysisOptions, LAWS
from .dispatcher import analyze, law, list_laws
from .results import (
    AnalysisResult,
    BenfordAnalysis,
    DiagnosticResult,
    GeneratedData,
    IntegrationAnalysis,
    NormalAnalysis,
    ParetoAnalysis,
    PoissonAnalysis,
    RiskLevel,
    ValidationResult,
    ZipfAnalysis,
)
from .utils.exceptions import (
    InsufficientData,
    InvalidParameter,
    LawkitError,
    NoValidNumbers,
    UnknownSubcommand,
)

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "law",
    "list_laws",
    "AnalysisOptions",
    "LAWS",
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
    "LawkitError",
    "UnknownSubcommand",
    "NoValidNumbers",
    "InsufficientData",
    "InvalidParameter",
]
