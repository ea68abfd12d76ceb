"""Shared pytest fixtures for the json-log-device test suite."""

import datetime
import io

import pytest

from json_log_device.models import LogEvent


@pytest.fixture()
def event_time() -> datetime.datetime:
    return datetime.datetime(2025, 8, 27, 12, 45, 56, 123456,
                             tzinfo=datetime.timezone(datetime.timedelta(hours=-7)))


@pytest.fixture()
def event(event_time) -> LogEvent:
    """An INFO event with two flat attributes."""
    return LogEvent(
        time=event_time,
        severity=20,
        message="message",
        progname="test",
        pid=12345,
        attributes={"foo": "bar", "baz": "boo"},
    )


@pytest.fixture()
def make_event(event_time):
    """Factory for events that differ only in message and attributes."""
    def _make(attributes=None, message="message", **overrides):
        fields = dict(time=event_time, severity=20, message=message,
                      progname="test", pid=12345, attributes=attributes)
        fields.update(overrides)
        return LogEvent(**fields)
    return _make


@pytest.fixture()
def output() -> io.StringIO:
    return io.StringIO()
