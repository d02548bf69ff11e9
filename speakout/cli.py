#!/usr/bin/env python3
"""
speakout diagnostic command line
"""

from __future__ import annotations

import argparse
import dataclasses
import sys

from speakout.__version__ import __version__
from speakout.config import (
    OUTPUT_MODE_ACTIVE_WINDOW,
    OUTPUT_MODE_CLIPBOARD,
    OutputConfig,
    load_config,
)
from speakout.errors import OutputError
from speakout.log import setup_logging
from speakout.output.factory import OutputFactory
from speakout.platform.environment import (
    detect_environment,
    get_environment_info,
    has_tray_watcher,
)
from speakout.security import SecurityPolicy

EXIT_OK = 0
EXIT_OUTPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='speakout',
        description='Deliver text to the clipboard or the focused window',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file (default: ~/.config/speakout/config.json)'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Path to log file (default: ~/.speakout.log)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('info', help='Show detected environment and selected tools')
    copy_p = sub.add_parser('copy', help='Copy text to the clipboard')
    copy_p.add_argument('text', nargs='?', help='Text to copy (default: read stdin)')
    type_p = sub.add_parser('type', help='Type text into the focused window')
    type_p.add_argument('text', nargs='?', help='Text to type (default: read stdin)')
    return parser


def _print_info(factory: OutputFactory) -> None:
    env = detect_environment()
    clipboard_tool, type_tool = factory.select_tools(env)
    for key, value in get_environment_info().items():
        print(f"{key:<16}{value}")
    print(f"{'tray_watcher':<16}{str(has_tray_watcher()).lower()}")
    print(f"{'clipboard_tool':<16}{clipboard_tool}")
    print(f"{'type_tool':<16}{type_tool}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for speakout"""
    args = build_parser().parse_args(argv)
    log = setup_logging(debug=args.debug, log_file=args.log_file)

    try:
        conf = load_config(args.config)
    except (OSError, ValueError) as e:
        log.error("Failed to load config: %s", e)
        return EXIT_CONFIG_ERROR

    output_config = OutputConfig.from_dict(conf)
    policy = SecurityPolicy.from_dict(conf)

    if args.command == 'info':
        _print_info(OutputFactory(output_config, policy, logger=log))
        return EXIT_OK

    mode = OUTPUT_MODE_CLIPBOARD if args.command == 'copy' else OUTPUT_MODE_ACTIVE_WINDOW
    factory = OutputFactory(dataclasses.replace(output_config, default_mode=mode), policy, logger=log)
    text = args.text if args.text is not None else sys.stdin.read()

    try:
        outputter = factory.get_outputter()
        if args.command == 'copy':
            outputter.copy_to_clipboard(text)
        else:
            outputter.type_to_active_window(text)
    except OutputError as e:
        log.error("%s", e)
        return EXIT_OUTPUT_ERROR

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
