# wallcon_monitor/main.py

import configparser
import logging
import sys

from .cli import build_parser
from .config import Config
from .errors import CommandError, DeviceClientError
from .logging import ConsoleLog, ResponseLog
from .services.commands import Command, resolve_command
from .services.device_client import WallConnectorClient
from .services.monitor_loop import MonitorLoop


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_cfg = Config.load_optional(args.config)
    except (OSError, ValueError, configparser.Error) as exc:
        parser.error(str(exc))

    console_logger = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    )
    log = console_logger.setup()
    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.INFO)

    try:
        command = resolve_command(args.command)
    except CommandError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code

    if args.continuous and command is not Command.VITALS:
        parser.error("--continuous is only supported with the vitals command")
    if args.continuous and args.json:
        parser.error("--json cannot be combined with --continuous")

    delay = args.delay or app_cfg.monitor.delay
    timeout = args.timeout or app_cfg.device.timeout
    log_path = args.log or app_cfg.logging.response_log

    response_log = ResponseLog(log_path) if log_path else None
    client = WallConnectorClient(args.addr, log, timeout=timeout)
    loop = MonitorLoop(client, log, response_log=response_log)

    try:
        if args.continuous:
            loop.run_continuous(command, delay)
        else:
            loop.run_once(command, json_output=args.json)
    except DeviceClientError as exc:
        print(f"Error fetching {command.label}: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        log.debug("Interrupted before the response arrived")
    finally:
        if response_log is not None:
            response_log.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
