"""JSON device: maps log events to documents and writes one per line."""

import logging

from json_log_device.builder import build_document
from json_log_device.formatter import DEFAULT_DATETIME_FORMAT, ValueFormatter
from json_log_device.mapping import DEFAULT_MAPPING, MappingCompiler, RoutingTable
from json_log_device.models import LogEvent
from json_log_device.serializer import serialize
from json_log_device.writer import LineWriter

logger = logging.getLogger(__name__)


class JsonDevice:
    """Writes log events as JSON documents, one document per line.

    The mapping keys are the standard fields (time, severity, progname, pid,
    message), ``attributes`` for whatever attributes are left over, and any
    attribute name to pull out of the attributes. Values may be True (same
    name), a key, a dotted key or list for a nested location, ``"*"`` for the
    attributes to spread them over the root, a callable returning a dict to
    merge into the document, or False/None to leave the field out.
    """

    def __init__(self, output="stdout", mapping=DEFAULT_MAPPING, formatter=None,
                 datetime_format: str | None = None, utc: bool = False,
                 post_processor=None, pretty: bool = False):
        self._writer = LineWriter(output)
        self._compiler = MappingCompiler(mapping)

        if formatter is not None:
            self.formatter = formatter
            if datetime_format is not None:
                self.formatter.datetime_format = datetime_format
        else:
            self.formatter = ValueFormatter(
                datetime_format=datetime_format or DEFAULT_DATETIME_FORMAT,
                utc=utc,
            )

        self.post_processor = post_processor
        self.pretty = bool(pretty)

    @property
    def stream(self):
        return self._writer.stream

    @property
    def mapping(self) -> dict:
        return self._compiler.mapping

    @mapping.setter
    def mapping(self, mapping) -> None:
        self._compiler.compile(mapping)

    @property
    def routing_table(self) -> RoutingTable:
        return self._compiler.table

    def map(self, field_mapping) -> dict:
        """Add to the current mapping; falsy values remove a field."""
        self._compiler.extend(field_mapping)
        return self.mapping

    @property
    def datetime_format(self) -> str | None:
        return getattr(self.formatter, "datetime_format", None)

    @datetime_format.setter
    def datetime_format(self, fmt: str | None) -> None:
        self.formatter.datetime_format = fmt

    def as_document(self, event: LogEvent) -> dict:
        return build_document(
            self._compiler.table,
            event,
            formatter=self.formatter,
            post_processor=self.post_processor,
        )

    def write(self, event: LogEvent) -> None:
        if event.is_empty():
            logger.debug("Skipping log event with empty message")
            return

        try:
            text = serialize(self.as_document(event), pretty=self.pretty)
        except Exception:
            logger.exception("Dropping log event that could not be serialized")
            return
        try:
            self._writer.write(text)
        except Exception:
            logger.exception("Failed to write log event")

    def flush(self) -> None:
        self._writer.flush()

    def close(self) -> None:
        self._writer.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.flush()
        self.close()
