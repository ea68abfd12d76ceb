"""Compile a field mapping into an immutable routing table."""

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType

from json_log_device.destinations import Destination, Excluded, parse_destination

logger = logging.getLogger(__name__)

STANDARD_FIELDS = ("time", "severity", "message", "progname", "pid")
ATTRIBUTES_FIELD = "attributes"

DEFAULT_MAPPING = MappingProxyType({
    "time": True,
    "severity": True,
    "progname": True,
    "pid": True,
    "message": True,
    "attributes": True,
})


@dataclass(frozen=True)
class RoutingTable:
    time: Destination | None = None
    severity: Destination | None = None
    message: Destination | None = None
    progname: Destination | None = None
    pid: Destination | None = None
    attributes: Destination | None = None
    # (attribute path, destination) pairs in declaration order
    custom: tuple[tuple[tuple[str, ...], Destination], ...] = ()
    mapping: MappingProxyType = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    def standard(self):
        """Yield (field name, destination) for every mapped standard field."""
        for name in STANDARD_FIELDS:
            destination = getattr(self, name)
            if destination is not None:
                yield name, destination


def compile_mapping(mapping) -> RoutingTable:
    """Compile *mapping* into a RoutingTable. Pure; never raises on bad values."""
    slots = {}
    custom = []
    for raw_selector, raw in mapping.items():
        selector = str(raw_selector)
        destination = parse_destination(
            selector, raw, allow_splat=selector == ATTRIBUTES_FIELD
        )
        if isinstance(destination, Excluded):
            continue
        if selector in STANDARD_FIELDS or selector == ATTRIBUTES_FIELD:
            slots[selector] = destination
        else:
            custom.append((tuple(selector.split(".")), destination))

    return RoutingTable(
        custom=tuple(custom),
        mapping=MappingProxyType({str(k): v for k, v in mapping.items()}),
        **slots,
    )


class MappingCompiler:
    """Holds the current routing table and swaps it atomically on update.

    Readers use ``table`` without locking; writers are serialized.
    """

    def __init__(self, mapping=DEFAULT_MAPPING):
        self._lock = threading.Lock()
        self._table = compile_mapping(mapping)

    @property
    def table(self) -> RoutingTable:
        return self._table

    @property
    def mapping(self) -> dict:
        return dict(self._table.mapping)

    def compile(self, mapping) -> RoutingTable:
        table = compile_mapping(mapping)
        with self._lock:
            self._table = table
        logger.debug("Compiled mapping with %d entries", len(table.mapping))
        return table

    def extend(self, partial) -> RoutingTable:
        """Merge *partial* onto the current mapping and recompile."""
        with self._lock:
            merged = dict(self._table.mapping)
            merged.update({str(k): v for k, v in partial.items()})
            table = compile_mapping(merged)
            self._table = table
        logger.debug("Extended mapping with %d entries", len(partial))
        return table
