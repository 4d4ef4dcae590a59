"""
Main entry point for the Resource Monitor.
Parses command-line arguments, configures logging and dispatches commands.
"""
import argparse
import json
import math
import sys
import time
from typing import List, Optional

from resource_monitor.config import ConfigManager
from resource_monitor.core import ResourceMonitor
from resource_monitor.monitoring import SampleEngine, get_host_info
from resource_monitor.ui import ConsolePresenter, display_error, display_info, format_result, render_status_line
from resource_monitor.utils.logger import setup_logger, get_logger
from resource_monitor.version import __app_name__, __version__

logger = get_logger("resource_monitor.main")


def _configure_logging(config: ConfigManager, log_level: Optional[str]):
    setup_logger(
        console_level_name=log_level or config.get('logging.console_level'),
        file_level_name=config.get('logging.file_level'),
        log_file_path=config.get('logging.file_path'),
        max_bytes=config.get('logging.max_bytes'),
        backup_count=config.get('logging.backup_count')
    )


def _interval(args: argparse.Namespace, config: ConfigManager) -> float:
    return args.interval if args.interval is not None else config.get('monitor.interval_sec')


def _run_monitor_command(args: argparse.Namespace, config: ConfigManager) -> int:
    """Handles the 'run' CLI command."""
    interval = _interval(args, config)
    presenter = ConsolePresenter(placeholder=config.get('monitor.placeholder'))
    monitor = ResourceMonitor(config, interval=interval)
    monitor.subscribe(presenter)
    display_info(f"Sampling every {interval:g}s. Press Ctrl+C to stop.")
    monitor.run_forever()
    presenter.finish()
    return 0


def _run_once_command(args: argparse.Namespace, config: ConfigManager) -> int:
    """Handles the 'once' CLI command."""
    interval = _interval(args, config)
    engine = SampleEngine()
    try:
        engine.sample()
        time.sleep(interval)
        result = engine.sample()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received (Ctrl+C). Aborting sample.")
        return 1
    finally:
        engine.close()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_status_line(format_result(result, config.get('monitor.placeholder'))))
    return 0


def _run_info_command(args: argparse.Namespace, config: ConfigManager) -> int:
    """Handles the 'info' CLI command."""
    host_info = get_host_info()
    if args.json:
        print(json.dumps(host_info, indent=2))
        return 0

    print(f"Hostname:   {host_info['hostname']}")
    print(f"OS:         {host_info['os_info']}")
    print(f"CPUs:       {host_info['cpu_count']}")
    print(f"Total RAM:  {host_info['total_ram'] / (1024 ** 3):.1f} GiB")
    print(f"Interfaces: {', '.join(host_info['interfaces']) or 'none'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resource-monitor", description=f"{__app_name__}: CPU, RAM and network usage from /proc.")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--config', help='Path to a JSON configuration file.')
    parser.add_argument('--interval', type=float, help='Sampling interval in seconds (overrides the configuration).')
    parser.add_argument('--log-level', help='Console log level, e.g. DEBUG or INFO.')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', help='Show a live status line until Ctrl+C (default).')
    run_parser.set_defaults(func=_run_monitor_command)

    once_parser = subparsers.add_parser('once', help='Sample over one interval and print the result.')
    once_parser.add_argument('--json', action='store_true', help='Print the raw result as JSON.')
    once_parser.set_defaults(func=_run_once_command)

    info_parser = subparsers.add_parser('info', help='Print host hardware information.')
    info_parser.add_argument('--json', action='store_true', help='Print the information as JSON.')
    info_parser.set_defaults(func=_run_info_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to parse arguments and dispatch commands.

    :param argv: Command-line arguments without the program name
    :type argv: Optional[List[str]]
    :return: Process exit status
    :rtype: int
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interval is not None and (not math.isfinite(args.interval) or args.interval <= 0):
        display_error("--interval must be a finite positive number of seconds.")
        return 1

    try:
        config = ConfigManager(args.config)
    except (FileNotFoundError, ValueError) as e:
        display_error(str(e), "CONFIG")
        return 1

    _configure_logging(config, args.log_level)
    logger.debug(f"Running command: {args.command or 'run'}")
    handler = getattr(args, 'func', _run_monitor_command)
    return handler(args, config)


if __name__ == '__main__':
    sys.exit(main())
