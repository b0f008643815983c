#!/usr/bin/env python3
"""
Run a SQL statement against Dune and print the rows (or the CSV export).

Usage:
    DUNE_API_KEY=... python scripts/run_sql.py "SELECT 1 AS n"
    DUNE_API_KEY=... python scripts/run_sql.py --csv --limit 10 "SELECT ..."
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sandworm import DuneError, ResultOptions, create_dune_client, load_settings  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("sql", help="SQL text to execute")
    parser.add_argument("--timeout", type=float, default=60.0, help="Seconds to wait")
    parser.add_argument("--limit", type=int, default=None, help="Maximum rows")
    parser.add_argument("--csv", action="store_true", help="Print CSV instead of rows")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    options = ResultOptions(limit=args.limit) if args.limit else None

    try:
        with create_dune_client(settings, mode="blocking") as client:
            if args.csv:
                execute = client.execute_sql(args.sql)
                client.wait_for_results(execute.execution_id, args.timeout)
                print(client.get_execution_results_csv(execute.execution_id, options), end="")
            else:
                results = client.run_sql(args.sql, args.timeout, options=options)
                for row in results.rows:
                    print(row)
    except DuneError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    exit(main())
