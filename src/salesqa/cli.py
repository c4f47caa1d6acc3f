"""salesqa command line interface.

Commands:
- salesqa ask: answer a question against the sales store
- salesqa plan: show the classified intent and generated query, no store access
- salesqa schema: list the tables and columns of the store
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from dependency_injector import providers

from salesqa.application.analysis.errors import PlanGenerationError
from salesqa.application.analysis.orchestrator import NOT_UNDERSTOOD_MESSAGE
from salesqa.domain.value_objects import Query, intent_to_dict
from salesqa.shared.config import AppConfig
from salesqa.shared.dependency_injection import Container
from salesqa.shared.logging import configure_from_config

__all__ = ["main", "build_parser"]


def _apply_overrides(container: Container, args: argparse.Namespace) -> AppConfig:
    if args.config:
        os.environ[AppConfig._yaml_env_var] = args.config
        config = AppConfig()
    else:
        config = container.config()
    if args.database:
        duckdb_settings = config.database.duckdb.model_copy(update={"path": args.database})
        config = config.model_copy(
            update={"database": config.database.model_copy(update={"duckdb": duckdb_settings})}
        )
    container.config.override(providers.Object(config))
    return config


def run_ask(container: Container, args: argparse.Namespace) -> int:
    bundle = container.analysis_orchestrator().answer_question(args.question)
    if args.json:
        print(bundle.model_dump_json(indent=2))
    else:
        print(bundle.narrative.rstrip())
        if args.show_sql and bundle.sql:
            print("\n-- SQL --")
            print(bundle.sql)
    return 1 if bundle.error else 0


def run_plan(container: Container, args: argparse.Namespace) -> int:
    intent = container.intent_classifier().classify(Query(args.question))
    try:
        plan = container.query_planner().create_plan(intent)
    except PlanGenerationError as exc:
        print(NOT_UNDERSTOOD_MESSAGE, file=sys.stderr)
        print(f"({exc})", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"intent": intent_to_dict(intent), "sql": plan.sql}, indent=2))
    else:
        print(f"Intent: {intent.kind}")
        for key, value in intent_to_dict(intent).items():
            if key != "kind":
                print(f"  {key}: {value}")
        print()
        print(plan.sql)
    return 0


def run_schema(container: Container, args: argparse.Namespace) -> int:
    schema = container.sales_repository().describe_schema()
    if args.json:
        print(json.dumps(schema, indent=2))
        return 0
    if not schema:
        print("No tables found.")
        return 0
    for table, columns in schema.items():
        print(table)
        for column in columns:
            flags = []
            if column["pk"]:
                flags.append("PRIMARY KEY")
            if column["notnull"]:
                flags.append("NOT NULL")
            suffix = f" ({', '.join(flags)})" if flags else ""
            print(f"  {column['name']}: {column['type']}{suffix}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salesqa",
        description="Answer plain-English questions about sales data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="Path to a config.yaml file")
    parser.add_argument("--database", type=str, help="DuckDB database path (overrides config)")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    ask_parser = subparsers.add_parser("ask", help="Answer a question")
    ask_parser.add_argument("question", help="Natural language question")
    ask_parser.add_argument("--json", action="store_true", help="Output the full response as JSON")
    ask_parser.add_argument("--show-sql", action="store_true", help="Print the executed query")

    plan_parser = subparsers.add_parser("plan", help="Show the intent and query for a question")
    plan_parser.add_argument("question", help="Natural language question")
    plan_parser.add_argument("--json", action="store_true", help="Output as JSON")

    schema_parser = subparsers.add_parser("schema", help="List store tables and columns")
    schema_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


_HANDLERS = {
    "ask": run_ask,
    "plan": run_plan,
    "schema": run_schema,
}


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.config and not Path(args.config).expanduser().is_file():
        parser.error(f"config file not found: {args.config}")

    container = container or Container()
    config = _apply_overrides(container, args)
    configure_from_config(config, level=args.log_level)
    return _HANDLERS[args.command](container, args)


if __name__ == "__main__":
    sys.exit(main())
