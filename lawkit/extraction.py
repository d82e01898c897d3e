import math
import numbers
import re
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import AnalysisOptions
from .utils.exceptions import InvalidParameter, NoValidNumbers
from .utils.logger_config import setup_logger
from .utils.numerals import (
    contains_kanji_numeral,
    normalize_numeral_text,
    parse_kanji_numeral,
    strip_international_formatting,
)

logger = setup_logger(__name__)

_FILTER_COMPARISON = re.compile(r"^(>=|<=|>|<|==|=)\s*([-+]?[\d.]+(?:[eE][-+]?\d+)?)$")
_FILTER_RANGE = re.compile(r"^([-+]?[\d.]+(?:[eE][-+]?\d+)?)\s*(?:-|\.\.|to)\s*([-+]?[\d.]+(?:[eE][-+]?\d+)?)$")


class NumericExtractor:
    """
    Normalizes input of unknown shape into a flat sample of finite numbers.

    This class handles:
    - Walking nested sequences, mappings and DataFrames (values in insertion / column order)
    - Parsing numeric strings, including full-width and other Unicode digits
    - Optional kanji numerals and currency / thousands-separator formats
    - Optional range filtering of the collected values
    - Skipping mapping keys that match ignore_keys_regex, and keeping only leaves
      whose dotted key path contains path_filter

    Attributes:
    options (AnalysisOptions): Resolved options of the current call
    skipped (int): Number of leaves that were not usable numbers in the last extraction
    """

    def __init__(self, options: Optional[AnalysisOptions] = None) -> None:
        self.options = options or AnalysisOptions()
        self.skipped = 0
        self._ignore_keys = re.compile(self.options.ignore_keys_regex) if self.options.ignore_keys_regex else None

    def extract(self, data: Any) -> np.ndarray:
        """
        Collect every usable number from ``data``

        Args:
        data (Any): Nested lists, tuples, mappings, arrays, scalars or strings

        Returns:
        np.ndarray: Float64 sample in traversal order

        Raises:
        NoValidNumbers: Nothing usable was found (also for None and empty collections)
        InvalidParameter: The filter option could not be parsed
        """
        self.skipped = 0
        values: List[float] = []
        self._walk(data, values)

        sample = np.asarray(values, dtype=float)
        if sample.size == 0:
            raise NoValidNumbers(
                f'No valid numbers found in input ({self.skipped} non-numeric entries skipped)'
            )

        if self.options.filter:
            sample = apply_range_filter(sample, self.options.filter)
            if sample.size == 0:
                raise NoValidNumbers(f'No valid numbers found after applying filter {self.options.filter!r}')

        logger.debug(f'Extracted {sample.size} numbers, skipped {self.skipped} entries')
        return sample

    def _walk(self, node: Any, out: List[float], path: str = "") -> None:
        if node is None:
            return
        if isinstance(node, pd.DataFrame):
            # column by column, like a mapping of columns
            node = {column: node[column].tolist() for column in node.columns}
        if isinstance(node, Mapping):
            for key, value in node.items():
                if self._ignore_keys is not None and self._ignore_keys.search(str(key)):
                    continue
                self._walk(value, out, f"{path}.{key}" if path else str(key))
            return
        if isinstance(node, (pd.Series, pd.Index)):
            node = node.tolist()
        if isinstance(node, np.ndarray):
            node = node.ravel().tolist()
        if isinstance(node, (list, tuple, set, frozenset)):
            for item in node:
                self._walk(item, out, path)
            return

        if self.options.path_filter and self.options.path_filter not in path:
            return
        number = self._to_number(node)
        if number is None:
            self.skipped += 1
        else:
            out.append(number)

    def _to_number(self, leaf: Any) -> Optional[float]:
        # bool is an int subclass but never a measurement
        if isinstance(leaf, (bool, np.bool_)):
            return None
        # Decimal and Fraction included; complex fails float()
        if isinstance(leaf, numbers.Number):
            try:
                number = float(leaf)
            except (TypeError, ValueError, OverflowError):
                return None
            return number if math.isfinite(number) else None
        if isinstance(leaf, str):
            return self._parse_text(leaf)
        return None

    def _parse_text(self, text: str) -> Optional[float]:
        cleaned = normalize_numeral_text(text)
        if not cleaned:
            return None
        if self.options.enable_international_numerals:
            cleaned = strip_international_formatting(cleaned)
        if self.options.enable_japanese_numerals and contains_kanji_numeral(cleaned):
            parsed = parse_kanji_numeral(cleaned)
            return float(parsed) if parsed is not None else None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return number if math.isfinite(number) else None


def parse_range_filter(expression: str) -> Tuple[float, float, bool, bool]:
    """Parse '>=100', '<1000', '50-500' into (low, high, low_inclusive, high_inclusive)."""
    expr = normalize_numeral_text(expression).replace(" ", "")
    match = _FILTER_COMPARISON.match(expr)
    try:
        if match:
            op, raw = match.groups()
            bound = float(raw)
            if op in ("==", "="):
                return bound, bound, True, True
            if op.startswith(">"):
                return bound, math.inf, op == ">=", False
            return -math.inf, bound, False, op == "<="
        match = _FILTER_RANGE.match(expr)
        if match:
            low, high = (float(part) for part in match.groups())
            if low > high:
                low, high = high, low
            return low, high, True, True
    except ValueError:
        pass
    raise InvalidParameter(f"Invalid parameter filter: cannot parse {expression!r} (try '>=100', '<1000' or '50-500')")


def apply_range_filter(sample: np.ndarray, expression: str) -> np.ndarray:
    low, high, low_inclusive, high_inclusive = parse_range_filter(expression)
    above = sample >= low if low_inclusive else sample > low
    below = sample <= high if high_inclusive else sample < high
    return sample[above & below]


def extract_numbers(data: Any, options: Optional[AnalysisOptions] = None) -> np.ndarray:
    """Functional shortcut around NumericExtractor.extract."""
    return NumericExtractor(options).extract(data)
