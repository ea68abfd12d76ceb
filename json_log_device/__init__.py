"""Map structured log events to JSON documents and write them as JSON lines."""

from json_log_device.builder import build_document, place
from json_log_device.destinations import (
    Destination,
    Excluded,
    FlatKey,
    Path,
    Splat,
    Transform,
    parse_destination,
)
from json_log_device.device import JsonDevice
from json_log_device.formatter import DEFAULT_DATETIME_FORMAT, ValueFormatter
from json_log_device.mapping import (
    DEFAULT_MAPPING,
    MappingCompiler,
    RoutingTable,
    compile_mapping,
)
from json_log_device.models import LogEvent
from json_log_device.serializer import serialize
from json_log_device.writer import LineWriter

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_DATETIME_FORMAT",
    "DEFAULT_MAPPING",
    "Destination",
    "Excluded",
    "FlatKey",
    "JsonDevice",
    "LineWriter",
    "LogEvent",
    "MappingCompiler",
    "Path",
    "RoutingTable",
    "Splat",
    "Transform",
    "ValueFormatter",
    "build_document",
    "compile_mapping",
    "parse_destination",
    "place",
    "serialize",
]
