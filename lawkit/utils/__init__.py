from .exceptions import LawkitError, UnknownSubcommand, NoValidNumbers, InsufficientData, InvalidParameter
from .logger_config import setup_logger
from .numerals import parse_kanji_numeral, normalize_numeral_text, strip_international_formatting

__all__ = [
    "LawkitError",
    "UnknownSubcommand",
    "NoValidNumbers",
    "InsufficientData",
    "InvalidParameter",
    "setup_logger",
    "parse_kanji_numeral",
    "normalize_numeral_text",
    "strip_international_formatting",
]
