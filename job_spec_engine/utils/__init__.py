"""Utility exports."""

from .date_parser import compute_duration_months, extract_year, parse_iso_date
from .helpers import (
    normalize_title_keyword,
    normalize_whitespace,
    parse_llm_json,
    split_highlights,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "parse_iso_date",
    "compute_duration_months",
    "extract_year",
    "normalize_whitespace",
    "normalize_title_keyword",
    "split_highlights",
    "parse_llm_json",
]
