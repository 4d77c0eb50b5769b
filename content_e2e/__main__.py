"""Command-line entry point for the end-to-end suite.

Usage:
    content-e2e run                       # run the configured feature list
    content-e2e run --tags=@negative      # forward tag filters to behave
    content-e2e run tests/integration/features/mcq_create.feature
    content-e2e query "SELECT * FROM questions WHERE content_id = $1" Q123
    content-e2e set-env ACCESS_TOKEN abc123
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from content_e2e.config import load_config
from content_e2e.errors import DatabaseQueryError
from content_e2e.logging_setup import configure_logging
from content_e2e.tasks import build_default_registry


def _run(args: argparse.Namespace) -> int:
    from behave.__main__ import main as behave_main

    config = load_config()
    features = args.features or config.runner.features
    behave_args: List[str] = []
    for tag in args.tags or []:
        behave_args.append(f"--tags={tag}")
    if args.stop:
        behave_args.append("--stop")
    behave_args.extend(features)
    print(f"[run] BASE_URL={config.runner.base_url} features={len(features)}")
    return int(behave_main(behave_args) or 0)


def _query(args: argparse.Namespace) -> int:
    registry = build_default_registry(load_config())
    try:
        rows = registry.run("queryDatabase", {"query": args.sql, "values": args.values})
    except DatabaseQueryError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(json.dumps(rows, indent=2, default=str, ensure_ascii=False))
    return 0


def _set_env(args: argparse.Namespace) -> int:
    registry = build_default_registry(load_config())
    registry.run("updateEnvFile", {"key": args.key, "value": args.value})
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="content-e2e", description="Content authoring API end-to-end suite")
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Run behave over the configured features")
    run_p.add_argument("features", nargs="*", help="Feature files or directories (default: configured list)")
    run_p.add_argument("--tags", action="append", help="behave tag expression, repeatable")
    run_p.add_argument("--stop", action="store_true", help="Stop at the first failure")
    run_p.set_defaults(func=_run)

    query_p = sub.add_parser("query", help="Run the queryDatabase task and print rows as JSON")
    query_p.add_argument("sql")
    query_p.add_argument("values", nargs="*")
    query_p.set_defaults(func=_query)

    env_p = sub.add_parser("set-env", help="Run the updateEnvFile task")
    env_p.add_argument("key")
    env_p.add_argument("value")
    env_p.set_defaults(func=_set_env)

    args = parser.parse_args(argv)
    configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
