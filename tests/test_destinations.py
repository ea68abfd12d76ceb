"""Tests for parsing raw mapping values into destinations."""

from json_log_device.destinations import (
    Excluded,
    FlatKey,
    Path,
    Splat,
    Transform,
    parse_destination,
)


class TestParseDestination:
    def test_true_uses_selector_name(self):
        assert parse_destination("message", True) == FlatKey("message")

    def test_true_with_dotted_selector(self):
        assert parse_destination("foo.bar", True) == Path(("foo", "bar"))

    def test_string_key(self):
        assert parse_destination("time", "timestamp") == FlatKey("timestamp")

    def test_dotted_string_is_path(self):
        assert parse_destination("pid", "process.pid") == Path(("process", "pid"))

    def test_list_is_path(self):
        assert parse_destination("progname", ["process", "name"]) == Path(("process", "name"))

    def test_single_element_list_is_flat_key(self):
        assert parse_destination("attributes", ["tags"]) == FlatKey("tags")

    def test_list_segments_are_not_split(self):
        assert parse_destination("x", ["a.b"]) == FlatKey("a.b")

    def test_empty_list_excluded(self):
        assert parse_destination("x", []) == Excluded()

    def test_splat_only_when_allowed(self):
        assert parse_destination("attributes", "*", allow_splat=True) == Splat()
        assert parse_destination("foo", "*") == FlatKey("*")

    def test_callable(self):
        fn = lambda v: {"v": v}
        assert parse_destination("time", fn) == Transform(fn)

    def test_falsy_values_excluded(self):
        for raw in (False, None, ""):
            assert parse_destination("message", raw) == Excluded()

    def test_unknown_kinds_excluded(self):
        for raw in (42, 3.5, {"a": 1}, ["a", 1]):
            assert parse_destination("message", raw) == Excluded()
