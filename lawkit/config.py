"""
Option handling for lawkit operations.

This module handles:
- The AnalysisOptions record with every recognized option and its default
- camelCase / snake_case key normalization
- Per-operation defaults merged underneath caller options
- Range validation of option values
"""

import math
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .results import RiskLevel
from .utils.exceptions import InvalidParameter
from .utils.logger_config import setup_logger

logger = setup_logger(__name__)

LAWS: Tuple[str, ...] = ("benford", "pareto", "zipf", "normal", "poisson")

LAW_ALIASES = {
    "benf": "benford",
    "benfords": "benford",
    "gauss": "normal",
    "gaussian": "normal",
}

BENFORD_DIGIT_MODES = {
    "first": "first",
    "1": "first",
    "second": "second",
    "2": "second",
    "first_two": "first_two",
    "firsttwo": "first_two",
    "two": "first_two",
    "both": "first_two",
}

FOCUS_AREAS = ("general", "outliers", "distribution")

# Options applied before caller options, per operation
OPERATION_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "validate": {"min_sample_size": 10},
    "diagnose": {"enable_outlier_detection": True},
    "selftest": {"generate_seed": 42, "generate_count": 1000},
}

DEFAULT_CONFIDENCE = 0.95
DEFAULT_SIGNIFICANCE = 0.05

_CAMEL_HUMP = re.compile(r"(?<=[a-z0-9])([A-Z])")


def normalize_key(key: str) -> str:
    """confidenceLevel -> confidence_level, generate-count -> generate_count."""
    return _CAMEL_HUMP.sub(r"_\1", str(key)).replace("-", "_").lower()


def canonical_law(name: Any, option: str = "law") -> str:
    """Resolve a law name or alias; raises InvalidParameter for unknown laws."""
    key = str(name).strip().lower()
    key = LAW_ALIASES.get(key, key)
    if key not in LAWS:
        raise InvalidParameter(f"Invalid parameter {option}: {name!r} (expected one of {', '.join(LAWS)})")
    return key


@dataclass(frozen=True)
class AnalysisOptions:
    """Configuration record shared by every operation"""

    # Statistical tests
    confidence_level: float = DEFAULT_CONFIDENCE
    significance_level: float = DEFAULT_SIGNIFICANCE
    min_sample_size: int = 30
    risk_threshold: Optional[RiskLevel] = None
    enable_outlier_detection: bool = False
    laws_to_check: Tuple[str, ...] = LAWS

    # Benford
    benford_digits: str = "first"
    benford_base: int = 10
    benford_min_digits: int = 5

    # Pareto / Zipf
    pareto_ratio: float = 0.8
    pareto_category_limit: Optional[int] = None
    zipf_rank_limit: Optional[int] = None
    zipf_frequency_cutoff: float = 0.0

    # Generation
    generate_count: int = 1000
    generate_seed: Optional[int] = None
    generate_range_min: Optional[float] = None
    generate_range_max: Optional[float] = None

    # Input handling
    enable_japanese_numerals: bool = False
    enable_international_numerals: bool = False
    filter: Optional[str] = None
    ignore_keys_regex: Optional[str] = None
    path_filter: Optional[str] = None

    enable_parallel_processing: bool = False
    focus: Optional[str] = None

    @classmethod
    def from_dict(cls, config_dict: Optional[Mapping[str, Any]], base: Optional['AnalysisOptions'] = None) -> 'AnalysisOptions':
        """Build options from a mapping, on top of ``base`` (or the defaults).

        Unknown keys are ignored. Values are coerced to the field's type and
        range-checked.
        """
        config = base or cls()
        if not config_dict:
            return config
        if not isinstance(config_dict, Mapping):
            raise InvalidParameter(f"Invalid parameter options: expected a mapping, got {type(config_dict).__name__}")

        known = {f.name for f in fields(cls)}
        updates: Dict[str, Any] = {}
        for raw_key, value in config_dict.items():
            key = normalize_key(raw_key)
            if key == "significance":
                key = "significance_level"
            if key not in known:
                logger.debug(f'Ignoring unrecognized option {raw_key!r}')
                continue
            if value is None:
                continue
            updates[key] = _coerce(key, value)

        return replace(config, **updates)

    def to_dict(self) -> Dict[str, Any]:
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            payload[f.name] = str(value) if isinstance(value, RiskLevel) else value
        return payload

    def sensitivity(self) -> float:
        """Multiplier applied to significance levels and tolerance bands.

        A LOW risk threshold flags deviations sooner; HIGH flags them later.
        """
        return _SENSITIVITY[self.risk_threshold]

    def effective_alpha(self) -> float:
        """Significance level scaled by sensitivity, capped at 0.5.

        An explicit significance_level wins; otherwise a non-default
        confidence_level sets it to 1 - confidence_level.
        """
        alpha = self.significance_level
        if alpha == DEFAULT_SIGNIFICANCE and self.confidence_level != DEFAULT_CONFIDENCE:
            alpha = 1.0 - self.confidence_level
        return min(0.5, alpha * self.sensitivity())


_SENSITIVITY = {
    None: 1.0,
    RiskLevel.LOW: 2.0,
    RiskLevel.MEDIUM: 1.0,
    RiskLevel.HIGH: 0.5,
}


def as_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidParameter(f"Invalid parameter {key}: expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"Invalid parameter {key}: expected a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidParameter(f"Invalid parameter {key}: must be finite, got {value!r}")
    return number


def _as_int(key: str, value: Any) -> int:
    number = as_float(key, value)
    if not number.is_integer():
        raise InvalidParameter(f"Invalid parameter {key}: expected an integer, got {value!r}")
    return int(number)


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "1", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "0", "off"):
        return False
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    raise InvalidParameter(f"Invalid parameter {key}: expected a boolean, got {value!r}")


def _unit_interval(key: str, value: Any) -> float:
    number = as_float(key, value)
    if not 0.0 <= number <= 1.0:
        raise InvalidParameter(f"Invalid parameter {key}: {number} is outside [0, 1]")
    return number


def positive_int(key: str, value: Any) -> int:
    number = _as_int(key, value)
    if number < 1:
        raise InvalidParameter(f"Invalid parameter {key}: must be at least 1, got {number}")
    return number


def _coerce_laws(key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [part for part in re.split(r"[,\s]+", value) if part]
    requested = {canonical_law(name, key) for name in value}
    if not requested:
        raise InvalidParameter(f"Invalid parameter {key}: at least one law is required")
    # canonical order regardless of the caller's order
    return tuple(law for law in LAWS if law in requested)


def _coerce_digits(key: str, value: Any) -> str:
    mode = BENFORD_DIGIT_MODES.get(str(value).strip().lower().replace("-", "_"))
    if mode is None:
        raise InvalidParameter(f"Invalid parameter {key}: {value!r} (expected first, second or first_two)")
    return mode


def coerce_base(key: str, value: Any) -> int:
    base = _as_int(key, value)
    if not 2 <= base <= 36:
        raise InvalidParameter(f"Invalid parameter {key}: base must be between 2 and 36, got {base}")
    return base


def _coerce_ratio(key: str, value: Any) -> float:
    ratio = as_float(key, value)
    if not 0.0 < ratio < 1.0:
        raise InvalidParameter(f"Invalid parameter {key}: must be strictly between 0 and 1, got {ratio}")
    return ratio


def coerce_seed(key: str, value: Any) -> int:
    seed = _as_int(key, value.strip() if isinstance(value, str) else value)
    if seed < 0:
        raise InvalidParameter(f"Invalid parameter {key}: seed must be non-negative, got {seed}")
    return seed


def _coerce_pattern(key: str, value: Any) -> Optional[str]:
    pattern = str(value)
    if not pattern:
        return None
    try:
        re.compile(pattern)
    except re.error as exc:
        raise InvalidParameter(f"Invalid parameter {key}: bad regular expression {pattern!r} ({exc})")
    return pattern


def _coerce_focus(key: str, value: Any) -> str:
    focus = str(value).strip().lower()
    if focus not in FOCUS_AREAS:
        raise InvalidParameter(f"Invalid parameter {key}: {value!r} (expected one of {', '.join(FOCUS_AREAS)})")
    return focus


def _non_negative_float(key: str, value: Any) -> float:
    number = as_float(key, value)
    if number < 0:
        raise InvalidParameter(f"Invalid parameter {key}: must be non-negative, got {number}")
    return number


_COERCERS = {
    "confidence_level": _unit_interval,
    "significance_level": _unit_interval,
    "min_sample_size": positive_int,
    "risk_threshold": lambda key, value: RiskLevel.parse(value),
    "enable_outlier_detection": _as_bool,
    "laws_to_check": _coerce_laws,
    "benford_digits": _coerce_digits,
    "benford_base": coerce_base,
    "benford_min_digits": positive_int,
    "pareto_ratio": _coerce_ratio,
    "pareto_category_limit": positive_int,
    "zipf_rank_limit": positive_int,
    "zipf_frequency_cutoff": _non_negative_float,
    "generate_count": positive_int,
    "generate_seed": coerce_seed,
    "generate_range_min": as_float,
    "generate_range_max": as_float,
    "enable_japanese_numerals": _as_bool,
    "enable_international_numerals": _as_bool,
    "filter": lambda key, value: str(value).strip() or None,
    "ignore_keys_regex": _coerce_pattern,
    "path_filter": lambda key, value: str(value) or None,
    "enable_parallel_processing": _as_bool,
    "focus": _coerce_focus,
}


def _coerce(key: str, value: Any) -> Any:
    return _COERCERS[key](key, value)


def resolve_options(operation: str, options: Any = None) -> AnalysisOptions:
    """Merge dataclass defaults, per-operation defaults and caller options."""
    if not isinstance(options, AnalysisOptions):
        merged = AnalysisOptions.from_dict(OPERATION_DEFAULTS.get(operation))
        options = AnalysisOptions.from_dict(options, base=merged)
    if (
        options.generate_range_min is not None
        and options.generate_range_max is not None
        and options.generate_range_min >= options.generate_range_max
    ):
        raise InvalidParameter(
            f"Invalid parameter generate_range_min: {options.generate_range_min} "
            f"is not below generate_range_max {options.generate_range_max}"
        )
    return options


__all__ = [
    "LAWS",
    "OPERATION_DEFAULTS",
    "AnalysisOptions",
    "as_float",
    "canonical_law",
    "coerce_base",
    "coerce_seed",
    "normalize_key",
    "positive_int",
    "resolve_options",
]
