"""
Synthetic sample generation for each law.

Every call owns its own numpy Generator seeded once, so concurrent calls
never share random state. Samples are built on stratified quantiles so
that re-analyzing them with the matching analyzer conforms to the law,
then shuffled.
"""

import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

import numpy as np
from scipy import stats

from .config import (
    AnalysisOptions,
    as_float,
    canonical_law,
    coerce_base,
    coerce_seed,
    normalize_key,
    positive_int,
)
from .results import GeneratedData, freeze_mapping
from .utils.exceptions import InvalidParameter
from .utils.logger_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_PARETO_ALPHA = math.log(5) / math.log(4)
DEFAULT_BENFORD_RANGE = (1.0, 1e6)


def _positive(key: str, value: Any) -> float:
    number = as_float(key, value)
    if number <= 0:
        raise InvalidParameter(f"Invalid parameter {key}: must be positive, got {number}")
    return number


def _strata(rng: np.random.Generator, count: int, low: float, high: float) -> np.ndarray:
    """One uniform draw per equal-width stratum of (0, 1), jittered within [low, high) of it."""
    return (np.arange(count) + rng.uniform(low, high, count)) / count


def _largest_remainder(probs: np.ndarray, count: int) -> np.ndarray:
    raw = probs * count
    allotted = np.floor(raw).astype(int)
    shortfall = count - int(allotted.sum())
    if shortfall > 0:
        order = np.argsort(-(raw - allotted), kind="stable")
        allotted[order[:shortfall]] += 1
    return allotted


def _generate_benford(rng, count, params, options):
    base = coerce_base("base", params.get("base", 10))
    low = options.generate_range_min if options.generate_range_min is not None else DEFAULT_BENFORD_RANGE[0]
    high = options.generate_range_max if options.generate_range_max is not None else DEFAULT_BENFORD_RANGE[1]
    if low <= 0:
        raise InvalidParameter(f"Invalid parameter generate_range_min: benford samples need a positive range, got {low}")
    if high <= low:
        raise InvalidParameter(f"Invalid parameter generate_range_max: {high} is not above {low}")

    digits = np.arange(1, base)
    probs = np.log1p(1 / digits) / math.log(base)
    leading = np.repeat(digits, _largest_remainder(probs / probs.sum(), count))

    # log-uniform inside [d, d+1) keeps every later digit Benford-distributed too
    mantissa = leading * ((leading + 1) / leading) ** rng.uniform(0, 1, count)
    log_base = math.log(base)
    lowest = np.ceil(np.log(low / mantissa) / log_base - 1e-12).astype(int)
    highest = np.maximum(np.floor(np.log(high / mantissa) / log_base + 1e-12).astype(int), lowest)
    exponents = rng.integers(lowest, highest + 1)
    values = np.clip(mantissa * float(base) ** exponents, low, high)
    return values, {"base": base, "range_min": low, "range_max": high}


def _generate_pareto(rng, count, params, options):
    alpha = _positive("alpha", params.get("alpha", DEFAULT_PARETO_ALPHA))
    range_min = options.generate_range_min
    default_xm = range_min if range_min is not None and range_min > 0 else 1.0
    xm = _positive("xm", params.get("xm", params.get("scale", default_xm)))
    u = _strata(rng, count, 0.4, 0.6)
    values = xm * (1 - u) ** (-1 / alpha)
    if options.generate_range_max is not None:
        values = np.minimum(values, options.generate_range_max)
    return values, {"alpha": alpha, "xm": xm}


def _generate_zipf(rng, count, params, options):
    exponent = _positive("s", params.get("s", params.get("exponent", 1.0)))
    range_max = options.generate_range_max
    default_scale = range_max if range_max is not None and range_max > 0 else 1000.0
    scale = _positive("scale", params.get("scale", default_scale))
    ranks = np.arange(1, count + 1)
    values = scale / ranks ** exponent * np.exp(rng.normal(0.0, 0.02, count))
    return values, {"s": exponent, "scale": scale}


def _generate_normal(rng, count, params, options):
    mean = as_float("mean", params.get("mean", 0.0))
    std_dev = _positive("std_dev", params.get("std_dev", params.get("std", 1.0)))
    values = stats.norm.ppf(_strata(rng, count, 0.25, 0.75), loc=mean, scale=std_dev)
    if options.generate_range_min is not None or options.generate_range_max is not None:
        values = np.clip(values, options.generate_range_min, options.generate_range_max)
    return values, {"mean": mean, "std_dev": std_dev}


def _generate_poisson(rng, count, params, options):
    lam = _positive("lambda", params.get("lambda", params.get("lam", 5.0)))
    values = stats.poisson.ppf(_strata(rng, count, 0.25, 0.75), lam).astype(float)
    if options.generate_range_min is not None or options.generate_range_max is not None:
        values = np.clip(values, options.generate_range_min, options.generate_range_max)
    return values, {"lambda": lam}


GENERATORS: Dict[str, Callable] = {
    "benford": _generate_benford,
    "pareto": _generate_pareto,
    "zipf": _generate_zipf,
    "normal": _generate_normal,
    "poisson": _generate_poisson,
}


def _read_config(config: Any) -> Dict[str, Any]:
    if isinstance(config, str):
        return {"type": config}
    if not isinstance(config, Mapping):
        raise InvalidParameter(
            f"Invalid parameter config: generate expects a mapping with a 'type', got {type(config).__name__}"
        )
    flat: Dict[str, Any] = {}
    nested = config.get("parameters") or {}
    if not isinstance(nested, Mapping):
        raise InvalidParameter("Invalid parameter parameters: expected a mapping of shape parameters")
    for source in (nested, config):
        for key, value in source.items():
            if key != "parameters" and value is not None:
                flat[normalize_key(key)] = value
    return flat


def generate_data(config: Any, options: AnalysisOptions, path: str = "generated") -> GeneratedData:
    """
    Generate a sample that follows one law

    Args:
    config (Any): Mapping with ``type`` (or ``law``), optional ``count``, ``seed`` and
        shape parameters at top level or under ``parameters``. A bare law name also works.
    options (AnalysisOptions): Supplies generate_count, generate_seed and the value range
    path (str): Identifier echoed in the result

    Returns:
    GeneratedData: Exactly ``count`` values plus the resolved parameters

    Raises:
    InvalidParameter: Missing or unknown law, or an out-of-range parameter
    """
    params = _read_config(config)
    law = params.get("type", params.get("law"))
    if law is None:
        raise InvalidParameter("Invalid parameter type: generate needs a law name ('type' or 'law')")
    law = canonical_law(law)

    count = positive_int("count", params["count"]) if "count" in params else options.generate_count
    seed: Optional[int] = coerce_seed("seed", params["seed"]) if "seed" in params else options.generate_seed

    logger.info(f'Generating {count} {law} values (seed={seed})')

    rng = np.random.default_rng(seed)
    values, resolved = GENERATORS[law](rng, count, params, options)
    values = rng.permutation(np.asarray(values, dtype=float))

    resolved["seed"] = seed
    logger.debug(f'Generated {law} sample: min={values.min():.4g} max={values.max():.4g}')

    return GeneratedData(
        data_type=law,
        count=int(values.size),
        parameters=freeze_mapping(resolved),
        sample_data=tuple(float(v) for v in values),
        analysis_summary=f"Generated {values.size} {law} values with parameters "
        + ", ".join(f"{k}={v}" for k, v in resolved.items()),
        path=path,
    )
