# File: spring_helper/__main__.py
"""
spring-helper — Module entry point.

Allows running the tool directly via::

    python -m spring_helper quick-start postgresql://user:pw@localhost/db public tw.mingchang.app

This module simply delegates to the CLI entry point defined in ``spring_helper.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from spring_helper.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
