"""User-facing output for the command line."""

import sys


SUCCESS = "✨"
WARN = "⚠️"
INFO = "💁"
SLEUTH = "🕵️"


def success(msg: str) -> None:
    print(f"{SUCCESS}  {msg}")


def info(msg: str) -> None:
    print(f"{INFO}  {msg}")


def warn(msg: str) -> None:
    print(f"{WARN}  {msg}")


def user_error(msg: str) -> None:
    print(f"{WARN}  {msg}", file=sys.stderr)
