"""Entry point for running ohlcrender as a module.

This allows the CLI to be invoked with ``python -m ohlcrender``.
"""

from .cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli()
