#!/usr/bin/env python3
"""Word frequency CLI."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from .analyzer import ReadErrorPolicy, WordCount, WordFrequencyAnalyzer
from .config import AnalysisConfig, parse_overrides
from .errors import TopWordsError
from .source import describe_source


def main() -> int:
    """Print the most frequent words of a text source."""
    parser = argparse.ArgumentParser(
        description="Find the most frequent words in a text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s book.txt                        # Top 10 words
  %(prog)s book.txt -k 25 --min-length 4   # Top 25 words of 4+ characters
  %(prog)s book.txt --config analysis.yml  # Settings from YAML
  %(prog)s book.txt --set k=5 min_length=3
  %(prog)s book.txt --json                 # Machine-readable output
        """,
    )

    parser.add_argument("source", help="Path of the text file to analyze")
    parser.add_argument("-k", "--top", dest="k", type=int, metavar="N", help="Number of words to report")
    parser.add_argument(
        "-m",
        "--min-length",
        type=int,
        metavar="N",
        help="Ignore words shorter than N characters",
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to analysis YAML config")
    parser.add_argument(
        "--set",
        nargs="+",
        metavar="KEY=VALUE",
        help="Override config values (e.g., --set k=5 read_errors=best-effort)",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Report partial results if the source fails mid-read",
    )
    parser.add_argument("--encoding", help="Text encoding of the source (default: utf-8)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Build config: defaults < file < --set < explicit flags
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1
        try:
            config = AnalysisConfig.from_yaml(args.config)
        except (ValueError, yaml.YAMLError) as e:
            print(f"Error: Invalid config {args.config}: {e}", file=sys.stderr)
            return 1
    else:
        config = AnalysisConfig()

    flags = {}
    if args.k is not None:
        flags["k"] = args.k
    if args.min_length is not None:
        flags["min_length"] = args.min_length
    if args.best_effort:
        flags["read_errors"] = ReadErrorPolicy.BEST_EFFORT
    if args.encoding:
        flags["encoding"] = args.encoding

    try:
        if args.set:
            config.override(parse_overrides(args.set))
        config.override(flags)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not Path(args.source).exists():
        print(f"Error: Source file not found: {args.source}", file=sys.stderr)
        return 1

    analyzer = WordFrequencyAnalyzer.from_config(config)
    try:
        top = analyzer.find_top_k_with_min_length(args.source, config.k, config.min_length)
    except TopWordsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    words = top.ordered()
    if args.json:
        print(json.dumps(_to_json(words, config), indent=2))
    else:
        _print_table(words, describe_source(args.source))

    return 0


def _to_json(words: list[WordCount], config: AnalysisConfig) -> dict:
    """Build the JSON document for a result."""
    return {
        "k": config.k,
        "min_length": config.min_length,
        "words": [{"word": w.word, "count": w.count} for w in words],
    }


def _print_table(words: list[WordCount], name: str) -> None:
    """Print ranked results, one word per line."""
    if not words:
        print(f"No words found in {name}.")
        return

    width = max(len(w.word) for w in words)
    for rank, w in enumerate(words, start=1):
        print(f"{rank:>3}. {w.word:<{width}}  {w.count}")


if __name__ == "__main__":
    sys.exit(main())
