"""Value formatter that turns a mapped document into JSON-safe primitives."""

import dataclasses
import datetime
import logging
from decimal import Decimal
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"

_PRIMITIVES = (str, int, float, bool, type(None))

# Marks a container that refers back to one of its ancestors.
_CYCLE = object()


class ValueFormatter:
    """Recursively converts values into JSON-safe types.

    Renderers can be registered per type with ``add``; the most specific
    class in the value's MRO wins. A value that fails to render is replaced
    with a diagnostic string and a warning is logged.
    """

    def __init__(self, datetime_format: str | None = DEFAULT_DATETIME_FORMAT,
                 utc: bool = False):
        self._renderers = {}
        self.utc = utc
        self.datetime_format = datetime_format

    @property
    def datetime_format(self) -> str | None:
        return self._datetime_format

    @datetime_format.setter
    def datetime_format(self, fmt: str | None) -> None:
        self._datetime_format = fmt
        if fmt:
            self.add(datetime.datetime, self._format_datetime)
            self.add(datetime.date, self._format_datetime)
        else:
            self.remove(datetime.datetime)
            self.remove(datetime.date)

    def add(self, cls: type, renderer) -> "ValueFormatter":
        self._renderers[cls] = renderer
        return self

    def remove(self, cls: type) -> "ValueFormatter":
        self._renderers.pop(cls, None)
        return self

    def format(self, document: dict) -> dict:
        return self._format_dict(document, {id(document)})

    def _format_datetime(self, value: datetime.date) -> str:
        if self.utc and isinstance(value, datetime.datetime):
            value = value.astimezone(datetime.timezone.utc)
        return value.strftime(self._datetime_format)

    def _renderer_for(self, value):
        for cls in type(value).__mro__:
            renderer = self._renderers.get(cls)
            if renderer is not None:
                return renderer
        return None

    def _format_dict(self, value: dict, ancestors: set) -> dict:
        formatted = {}
        for key, item in value.items():
            item = self._format_item(item, ancestors)
            if item is not _CYCLE:
                formatted[str(key)] = item
        return formatted

    def _format_list(self, value, ancestors: set) -> list:
        formatted = []
        for item in value:
            item = self._format_item(item, ancestors)
            if item is not _CYCLE:
                formatted.append(item)
        return formatted

    def _format_item(self, value, ancestors: set):
        try:
            return self._format_value(value, ancestors)
        except Exception as e:
            type_name = type(value).__name__
            logger.warning("Error serializing %s to JSON: %s %s", type_name,
                           type(e).__name__, e)
            return f"<Error serializing {type_name} to JSON: {type(e).__name__} {e}>"

    def _format_value(self, value, ancestors: set):
        renderer = self._renderer_for(value)
        if renderer is not None:
            rendered = renderer(value)
            if rendered is value or not isinstance(rendered, (dict, list, tuple)):
                return rendered
            value = rendered
        elif isinstance(value, _PRIMITIVES):
            return value

        if isinstance(value, (dict, list, tuple, set, frozenset)):
            if id(value) in ancestors:
                return _CYCLE
            ancestors = ancestors | {id(value)}
            if isinstance(value, dict):
                return self._format_dict(value, ancestors)
            return self._format_list(value, ancestors)

        if isinstance(value, datetime.date):
            if self.utc and isinstance(value, datetime.datetime):
                value = value.astimezone(datetime.timezone.utc)
            return value.isoformat()
        if isinstance(value, (datetime.time, datetime.timedelta)):
            return str(value)
        if isinstance(value, Enum):
            return self._format_value(value.value, ancestors)
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, BaseException):
            return {"class": type(value).__name__, "message": str(value)}
        if hasattr(value, "to_dict") and callable(value.to_dict):
            return self._format_value(value.to_dict(), ancestors)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._format_value(dataclasses.asdict(value), ancestors)
        return str(value)
