"""Bounded top-k selection and word frequency analysis."""

from .analyzer import (
    ReadErrorPolicy,
    WordCount,
    WordFrequencyAnalyzer,
    find_top_1_with_min_length,
    find_top_k,
    find_top_k_with_min_length,
    iter_words,
    new_word_container,
    sanitize_token,
)
from .cli import main
from .config import AnalysisConfig, parse_overrides
from .errors import InputReadError, InvalidCapacityError, TopWordsError
from .source import describe_source, iter_lines
from .topk import BoundedTopK

__all__ = [
    "BoundedTopK",
    "WordCount",
    "WordFrequencyAnalyzer",
    "ReadErrorPolicy",
    "find_top_k",
    "find_top_k_with_min_length",
    "find_top_1_with_min_length",
    "iter_words",
    "new_word_container",
    "sanitize_token",
    "AnalysisConfig",
    "parse_overrides",
    "TopWordsError",
    "InvalidCapacityError",
    "InputReadError",
    "describe_source",
    "iter_lines",
    "main",
]
