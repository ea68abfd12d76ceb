"""Destination variants describing where a mapped value lands in a document."""

from dataclasses import dataclass
from typing import Any, Callable

SPLAT = "*"


@dataclass(frozen=True)
class FlatKey:
    key: str


@dataclass(frozen=True)
class Path:
    segments: tuple[str, ...]


@dataclass(frozen=True)
class Splat:
    pass


@dataclass(frozen=True)
class Transform:
    fn: Callable[[Any], Any]


@dataclass(frozen=True)
class Excluded:
    pass


Destination = FlatKey | Path | Splat | Transform | Excluded


def _from_segments(segments) -> Destination:
    segments = tuple(str(s) for s in segments)
    if not segments:
        return Excluded()
    if len(segments) == 1:
        return FlatKey(segments[0])
    return Path(segments)


def parse_destination(selector: str, raw, allow_splat: bool = False) -> Destination:
    """Turn a raw mapping value into a Destination.

    Unrecognized kinds and falsy values become Excluded.
    """
    if raw is True:
        return _from_segments(selector.split("."))
    if isinstance(raw, str):
        if raw == SPLAT and allow_splat:
            return Splat()
        if not raw:
            return Excluded()
        return _from_segments(raw.split("."))
    if isinstance(raw, (list, tuple)):
        if not all(isinstance(s, str) for s in raw):
            return Excluded()
        return _from_segments(raw)
    if callable(raw):
        return Transform(raw)
    return Excluded()
