"""Module entrypoint for `python -m git_ssb`."""

from __future__ import annotations

import sys

from .cli import run


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
