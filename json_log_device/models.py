"""Log event model consumed by the document builder."""

import datetime
from dataclasses import dataclass, field
from typing import Any

SEVERITY_LABELS = {
    10: "DEBUG",
    20: "INFO",
    30: "WARN",
    40: "ERROR",
    50: "FATAL",
}


def severity_label(severity: int | str | None) -> str:
    """Return the label for a numeric or named severity."""
    if isinstance(severity, str):
        return severity.strip().upper()
    return SEVERITY_LABELS.get(severity, "ANY")


def _parse_time(value) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value, datetime.timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"epoch time out of range: {value!r}") from e
    if isinstance(value, str) and value:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class LogEvent:
    time: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    severity: int | str = 20
    message: Any = None
    progname: str | None = None
    pid: int | None = None
    attributes: dict | None = None

    @property
    def severity_label(self) -> str:
        return severity_label(self.severity)

    def is_empty(self) -> bool:
        """True when there is no message to log."""
        return self.message is None or self.message == ""

    @classmethod
    def from_dict(cls, d: dict) -> "LogEvent":
        """Build an event from a decoded JSON object."""
        attributes = d.get("attributes")
        return cls(
            time=_parse_time(d.get("time")),
            severity=d.get("severity", 20),
            message=d.get("message"),
            progname=d.get("progname"),
            pid=d.get("pid"),
            attributes=attributes if isinstance(attributes, dict) else None,
        )
