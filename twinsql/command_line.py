import argparse
from typing import List

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_command_line(command_line: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="twinsql",
        description="Run the same statements on two databases and compare.",
        add_help=False,
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="filename",
        nargs="?",
        type=str,
        required=False,
        help="Config file to use",
    )
    parser.add_argument(
        "-u",
        "--unordered",
        dest="unordered",
        action="store_true",
        help="compare rows regardless of their order",
    )
    parser.add_argument(
        "-s",
        "--strict-failures",
        dest="strict_failures",
        action="store_true",
        help="two failures only agree when they are the same error",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        dest="loglevel",
        nargs="?",
        type=str,
        required=False,
        choices=LOG_LEVELS,
        help="Log level",
    )
    parser.add_argument(
        "--help",
        action="help",
        help="show this help message and exit",
    )
    parser.set_defaults(
        filename="twinsql.yaml",
        unordered=False,
        strict_failures=False,
        loglevel=None,
    )
    return parser.parse_args(command_line)
