# wallcon_monitor/cli.py
import argparse

from wallcon_monitor.services.commands import COMMAND_NAMES


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive number of seconds")
    return value


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wallcon-monitor",
        description="Monitor a Tesla Wall Connector",
    )

    parser.add_argument(
        "addr",
        help="Name or IP address of the wall connector",
    )

    parser.add_argument(
        "command",
        help=f"Command to execute, can be abbreviated ({', '.join(COMMAND_NAMES)})",
    )

    parser.add_argument(
        "-c", "--continuous",
        action="store_true",
        help="Keep polling and redraw the display (vitals only)",
    )

    parser.add_argument(
        "-d", "--delay",
        type=_positive_int,
        default=None,
        help="Seconds between polls in continuous mode (default 5)",
    )

    parser.add_argument(
        "-l", "--log",
        metavar="PATH",
        help="Append each raw response to this JSONL file",
    )

    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="HTTP request timeout in seconds (default 5)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of human-readable text (single-shot only)",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress log output on stderr",
    )

    return parser
