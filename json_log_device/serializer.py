"""JSON serialization of finished documents."""

import json


def serialize(document: dict, pretty: bool = False) -> str:
    """Serialize a document to JSON text.

    Compact output never contains a raw newline, so each document fits on
    one line. Pretty output is indented and multi-line.
    """
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, default=str)
