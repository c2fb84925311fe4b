"""Configuration parsing for word frequency analyses."""

import codecs
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .analyzer import ReadErrorPolicy
from .errors import InvalidCapacityError

DEFAULT_K = 10

# Fields given as text on the command line that must be converted to int
_INT_FIELDS = ("k", "min_length")


@dataclass
class AnalysisConfig:
    """Settings for one analysis run."""

    k: int = DEFAULT_K
    min_length: int = 0
    read_errors: ReadErrorPolicy = ReadErrorPolicy.FAIL
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate and normalize field values.

        Raises:
            ValueError: On a non-integer ``k``/``min_length``, a non-positive
                ``k`` (as InvalidCapacityError), an unknown ``read_errors``
                value or an unknown encoding.
        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.k <= 0:
            raise InvalidCapacityError(self.k)

        self.read_errors = ReadErrorPolicy(self.read_errors)

        if not isinstance(self.encoding, str):
            raise ValueError(f"encoding must be a string, got {self.encoding!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}") from None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisConfig":
        """Create AnalysisConfig from a YAML dict.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        _check_keys(data)
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> "AnalysisConfig":
        """Load configuration from a YAML file. An empty file yields the defaults."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)

    def override(self, overrides: dict[str, Any]) -> None:
        """Override config values (e.g. from ``--set key=value``).

        The config is left unchanged if any override is invalid.
        """
        _check_keys(overrides)
        updated = replace(self, **overrides)
        for f in fields(self):
            setattr(self, f.name, getattr(updated, f.name))


def _check_keys(data: dict[str, Any]) -> None:
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")


def parse_overrides(args: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` arguments into config overrides.

    ``k`` and ``min_length`` are converted to int; every other value is
    kept as text and validated by AnalysisConfig.

    Raises:
        ValueError: On a missing ``=`` or a non-integer count.
    """
    result: dict[str, Any] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Invalid format: {arg}. Expected key=value")
        if key in _INT_FIELDS:
            try:
                result[key] = int(value)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {value!r}") from None
        else:
            result[key] = value
    return result
