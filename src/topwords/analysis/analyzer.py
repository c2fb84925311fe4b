"""Word frequency analysis over line-producing text sources.

Each line is split on whitespace, every token is stripped down to its ASCII
letters and digits, and tokens shorter than the minimum length are dropped.
Surviving words are counted and fed into a ``BoundedTopK`` so that only the
k most frequent words are retained.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import TYPE_CHECKING

from .errors import InputReadError
from .source import TextSource, describe_source, iter_lines
from .topk import BoundedTopK

if TYPE_CHECKING:
    from .config import AnalysisConfig

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


class ReadErrorPolicy(Enum):
    """What to do when a source fails while being read."""

    FAIL = "fail"  # Raise InputReadError, discard partial counts
    BEST_EFFORT = "best-effort"  # Log a warning, return partial counts


@dataclass(eq=False)
class WordCount:
    """A word and the number of times it has been seen.

    Ordered by ``count`` only. Equality is identity: two records for the same
    word are never created within one analysis.
    """

    word: str
    count: int = 1

    def increment(self) -> int:
        self.count += 1
        return self.count

    def __lt__(self, other: "WordCount") -> bool:
        return self.count < other.count

    def __str__(self) -> str:
        return self.word


def sanitize_token(token: str) -> str:
    """Strip every character that is not an ASCII letter or digit."""
    return _NON_ALNUM.sub("", token)


def iter_words(lines: Iterable[str], minimum_length: int = 0) -> Iterator[str]:
    """Yield sanitized words of at least ``minimum_length`` characters.

    Empty tokens (pure punctuation) are always skipped.
    """
    for line in lines:
        for token in line.split():
            word = sanitize_token(token)
            if word and len(word) >= minimum_length:
                yield word


def new_word_container(k: int) -> BoundedTopK[WordCount]:
    """Create an empty top-k container for word counts, identified by word."""
    return BoundedTopK(k, key=attrgetter("count"), identity=attrgetter("word"))


def find_top_k_with_min_length(
    source: TextSource,
    k: int,
    minimum_length: int = 0,
    *,
    read_errors: ReadErrorPolicy | str = ReadErrorPolicy.FAIL,
    encoding: str = "utf-8",
) -> BoundedTopK[WordCount]:
    """Find the k most frequent words of at least ``minimum_length`` characters.

    Args:
        source: File path, text stream, or iterable of lines.
        k: Number of words to keep. Must be positive.
        minimum_length: Words shorter than this are ignored. Zero or negative
            disables the filter.
        read_errors: Policy for read failures, as a ReadErrorPolicy or its value.
        encoding: Encoding for file paths.

    Returns:
        BoundedTopK of capacity k holding the most frequent WordCount records.

    Raises:
        InvalidCapacityError: If k is not a positive integer.
        InputReadError: If the source fails and the policy is FAIL.
        ValueError: If ``read_errors`` is not a known policy.
    """
    top = new_word_container(k)
    policy = ReadErrorPolicy(read_errors)
    counts: dict[str, WordCount] = {}
    lines = iter_lines(source, encoding=encoding)

    try:
        for word in iter_words(lines, minimum_length):
            record = counts.get(word)
            if record is None:
                record = counts[word] = WordCount(word)
            else:
                record.increment()
            top.insert_or_update(record)
    except InputReadError as e:
        if policy is ReadErrorPolicy.FAIL:
            raise
        logger.warning(
            "%s; returning partial results from %d line(s)", e, e.lines_read
        )

    logger.debug(
        "Analyzed %s: %d distinct word(s), kept %d of k=%d",
        describe_source(source),
        len(counts),
        len(top),
        k,
    )
    return top


def find_top_k(source: TextSource, k: int) -> BoundedTopK[WordCount]:
    """Find the k most frequent words with no length filter."""
    return find_top_k_with_min_length(source, k, 0)


def find_top_1_with_min_length(
    source: TextSource, minimum_length: int
) -> BoundedTopK[WordCount]:
    """Find the single most frequent word of at least ``minimum_length`` characters."""
    return find_top_k_with_min_length(source, 1, minimum_length)


class WordFrequencyAnalyzer:
    """Runs word frequency analyses with shared read settings.

    Each call builds its own counts and container; nothing is carried over
    between calls.
    """

    def __init__(
        self,
        read_errors: ReadErrorPolicy | str = ReadErrorPolicy.FAIL,
        encoding: str = "utf-8",
    ) -> None:
        self.read_errors = ReadErrorPolicy(read_errors)
        self.encoding = encoding

    @classmethod
    def from_config(cls, config: "AnalysisConfig") -> "WordFrequencyAnalyzer":
        """Create an analyzer using the read settings of a config."""
        return cls(
            read_errors=config.read_errors,
            encoding=config.encoding,
        )

    def find_top_k_with_min_length(
        self, source: TextSource, k: int, minimum_length: int = 0
    ) -> BoundedTopK[WordCount]:
        return find_top_k_with_min_length(
            source,
            k,
            minimum_length,
            read_errors=self.read_errors,
            encoding=self.encoding,
        )

    def find_top_k(self, source: TextSource, k: int) -> BoundedTopK[WordCount]:
        return self.find_top_k_with_min_length(source, k, 0)

    def find_top_1_with_min_length(
        self, source: TextSource, minimum_length: int
    ) -> BoundedTopK[WordCount]:
        return self.find_top_k_with_min_length(source, 1, minimum_length)
