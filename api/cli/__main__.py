"""CLI entry point for running as `python -m api.cli`.

Usage:
    python -m api.cli --db mydata.duckdb tables
    python -m api.cli --db mydata.duckdb column orders amount
    python -m api.cli --db mydata.duckdb storage
    python -m api.cli --db mydata.duckdb breakdown
    python -m api.cli --db mydata.duckdb shell
"""

import sys

from .repl import main


if __name__ == "__main__":
    sys.exit(main())
