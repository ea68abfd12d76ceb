"""json-log-device — map JSON-lines log events to configurable JSON documents."""

import json
import logging
import sys
from argparse import ArgumentParser

from json_log_device.config import load_config, load_mapping
from json_log_device.device import JsonDevice
from json_log_device.models import LogEvent

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="json-log-device",
        description="Map JSON-lines log events to configurable JSON documents.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Event file path(s); reads stdin when omitted",
    )
    parser.add_argument("--mapping", help="YAML mapping file")
    parser.add_argument("--output", help="Output file path (default: stdout)")
    parser.add_argument("--datetime-format", help="strftime format for timestamps")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print documents")
    parser.add_argument("--utc", action="store_true", help="Render timestamps in UTC")
    return parser


def read_lines(paths: list[str]):
    """Yield (line, source) pairs from each path, or stdin when none given."""
    if not paths:
        for line in sys.stdin:
            yield line, "<stdin>"
        return
    for path in paths:
        try:
            f = open(path, "r", encoding="utf-8")
        except OSError as e:
            logger.error("Skipping unreadable input %s: %s", path, e)
            continue
        with f:
            for line in f:
                yield line, path


def run(args) -> int:
    cfg = load_config()
    mapping = load_mapping(args.mapping or cfg.mapping_file)

    device = JsonDevice(
        output=args.output or cfg.output,
        mapping=mapping,
        datetime_format=args.datetime_format or cfg.datetime_format,
        utc=args.utc or cfg.utc,
        pretty=args.pretty or cfg.pretty,
    )

    skipped = 0
    with device:
        for line, source in read_lines(args.files):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
                if not isinstance(data, dict):
                    raise ValueError("event is not a JSON object")
                event = LogEvent.from_dict(data)
            except ValueError as e:
                skipped += 1
                logger.warning("Skipping malformed event from %s: %s", source, e)
                continue
            device.write(event)

    if skipped:
        logger.info("Skipped %d malformed events", skipped)
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, load_config().log_level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
