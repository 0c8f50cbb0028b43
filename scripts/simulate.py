"""Legacy wrapper for the dropout simulation CLI."""

from __future__ import annotations

import warnings

from dropwls.cli import simulate_main


def main() -> int:
    warnings.warn(
        "scripts/simulate.py is deprecated; use the canonical 'dropwls-simulate' entrypoint.",
        DeprecationWarning,
        stacklevel=1,
    )
    return simulate_main()


if __name__ == "__main__":
    raise SystemExit(main())
