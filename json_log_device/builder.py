"""Build a JSON-ready document from a log event and a routing table."""

from json_log_device.attributes import (
    attribute_value,
    compact_attributes,
    deep_merge,
    expand_attributes,
    remove_attribute,
)
from json_log_device.destinations import Excluded, FlatKey, Path, Splat, Transform
from json_log_device.mapping import RoutingTable
from json_log_device.models import LogEvent


def place(document: dict, destination, value) -> None:
    """Write *value* into *document* at *destination*. None is never written."""
    if value is None or destination is None:
        return

    if isinstance(destination, FlatKey):
        document[destination.key] = value
    elif isinstance(destination, Path):
        node = document
        for segment in destination.segments[:-1]:
            child = node.get(segment)
            child = dict(child) if isinstance(child, dict) else {}
            node[segment] = child
            node = child
        node[destination.segments[-1]] = value
    elif isinstance(destination, Transform):
        result = destination.fn(value)
        if isinstance(result, dict):
            deep_merge(document, _stringify_keys(result))
    elif isinstance(destination, (Excluded, Splat)):
        return


def _stringify_keys(value):
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    return value


def _event_value(event: LogEvent, name: str):
    if name == "severity":
        return event.severity_label
    return getattr(event, name)


def build_document(table: RoutingTable, event: LogEvent, formatter=None,
                   post_processor=None) -> dict:
    """Map *event* into a new document according to *table*.

    Standard fields are placed first, then individually mapped attributes in
    declaration order, then whatever attributes remain. The event and its
    attributes are left untouched.
    """
    document = {}
    for name, destination in table.standard():
        place(document, destination, _event_value(event, name))

    attributes = {}
    if event.attributes and (table.custom or table.attributes is not None):
        attributes = compact_attributes(expand_attributes(event.attributes))

    # Every lookup sees the full tree; removals happen once all are placed.
    extracted = []
    for path, destination in table.custom:
        value = attribute_value(attributes, path)
        if value is None:
            continue
        place(document, destination, value)
        extracted.append(path)
    for path in extracted:
        attributes = remove_attribute(attributes, path)

    if table.attributes is not None and attributes:
        if isinstance(table.attributes, Splat):
            merged = dict(attributes)
            merged.update(document)
            document = merged
        else:
            place(document, table.attributes, attributes)

    if formatter is not None:
        document = formatter.format(document)

    if post_processor is not None:
        processed = post_processor(document)
        if isinstance(processed, dict):
            document = processed

    return document
