"""Command-line entrypoint for nutrition-nl2sql."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from typing import TYPE_CHECKING

from nutrition_nl2sql import __version__

if TYPE_CHECKING:
    from nutrition_nl2sql.config import Settings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutrition-nl2sql",
        description=(
            "Answer questions about a personal nutrition log with validated, "
            "read-only SQL generated by an LLM."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override LOG_LEVEL for this invocation (for example DEBUG).",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for nutrition-nl2sql.",
    )
    subparsers.add_parser(
        "healthcheck",
        help="Check PostgreSQL connectivity with a read-only session.",
    )
    subparsers.add_parser(
        "show-schema",
        help="Print the schema descriptor embedded in generation prompts.",
    )
    subparsers.add_parser(
        "check-schema",
        help="Compare the schema descriptor against the live database.",
    )
    classify_parser = subparsers.add_parser(
        "classify",
        help="Show whether a question would be answered with SQL.",
    )
    classify_parser.add_argument("question", help="Natural language question.")
    prompt_parser = subparsers.add_parser(
        "build-prompt",
        help="Build the SQL-generation prompt for a question.",
    )
    prompt_parser.add_argument("question", help="Natural language question.")
    validate_parser = subparsers.add_parser(
        "validate-sql",
        help="Validate a SQL statement against the read-only safety rules.",
    )
    validate_parser.add_argument("sql", help="SQL statement to validate.")
    ask_parser = subparsers.add_parser(
        "ask",
        help="Answer a question about the nutrition log.",
    )
    ask_parser.add_argument("question", help="Natural language question.")
    ask_parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not answer non-aggregation questions with free text.",
    )
    ask_parser.add_argument(
        "--from",
        dest="start",
        type=date.fromisoformat,
        default=None,
        help="Free-text answers: first date of the range (YYYY-MM-DD).",
    )
    ask_parser.add_argument(
        "--to",
        dest="end",
        type=date.fromisoformat,
        default=None,
        help="Free-text answers: last date of the range (YYYY-MM-DD).",
    )
    ask_parser.add_argument(
        "--detail",
        choices=("low", "medium", "high"),
        default="medium",
        help="Free-text answers: level of detail (default: medium).",
    )
    ask_parser.add_argument(
        "--humour",
        action="store_true",
        help="Free-text answers: allow a lighter tone.",
    )
    ask_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full answer record as JSON.",
    )
    daily_parser = subparsers.add_parser(
        "daily-nutrition",
        help="List daily nutrition totals.",
    )
    daily_parser.add_argument(
        "--from",
        dest="start",
        type=date.fromisoformat,
        default=None,
        help="First date of the range (YYYY-MM-DD). Requires --to.",
    )
    daily_parser.add_argument(
        "--to",
        dest="end",
        type=date.fromisoformat,
        default=None,
        help="Last date of the range (YYYY-MM-DD). Requires --from.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _run_offline_command(args: argparse.Namespace) -> int | None:
    """Handle commands that need neither configuration nor collaborators."""
    if args.command == "show-schema":
        from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA

        print(f"Schema descriptor version {NUTRITION_SCHEMA.version}:")
        print(NUTRITION_SCHEMA.to_prompt_text())
        return 0

    if args.command == "classify":
        from nutrition_nl2sql.pipeline.classifier import is_aggregation_question

        if is_aggregation_question(args.question):
            print("aggregation: answered with generated SQL")
        else:
            print("fallback: answered with free text")
        return 0

    if args.command == "build-prompt":
        from nutrition_nl2sql.prompts.sql_generation import (
            PromptBuildError,
            build_sql_generation_prompt,
        )
        from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA

        try:
            prompt = build_sql_generation_prompt(args.question, NUTRITION_SCHEMA)
        except PromptBuildError as exc:
            print(f"Prompt build failed:\n{exc}", file=sys.stderr)
            return 1
        print(prompt)
        return 0

    if args.command == "validate-sql":
        from nutrition_nl2sql.sql.parser import SQLParseError, referenced_tables
        from nutrition_nl2sql.sql.validator import SQLValidationError, ensure_valid_sql

        try:
            ensure_valid_sql(args.sql)
        except SQLValidationError as exc:
            print("SQL validation failed:")
            print(f"- {exc.reason}")
            return 1

        print("SQL validation succeeded.")
        try:
            tables = referenced_tables(args.sql)
        except SQLParseError as exc:
            print(f"- tables_read: (could not parse: {exc})")
        else:
            print(f"- tables_read: {', '.join(tables) if tables else '(none)'}")
        return 0

    return None


async def _ask(args: argparse.Namespace, settings: Settings) -> int:
    from nutrition_nl2sql.db.connection import PostgresDatabase
    from nutrition_nl2sql.llm import create_llm_client
    from nutrition_nl2sql.models.answers import FallbackSignal, ValidationFailure
    from nutrition_nl2sql.pipeline.executor import ExecutionError
    from nutrition_nl2sql.pipeline.free_text import DateRange, FreeTextAnswerer
    from nutrition_nl2sql.pipeline.generator import GenerationError
    from nutrition_nl2sql.pipeline.orchestrator import QueryPipeline

    llm = create_llm_client(settings)
    database = PostgresDatabase(settings.postgres_dsn)

    try:
        outcome = await QueryPipeline(llm, database).answer(args.question)
        if isinstance(outcome, FallbackSignal) and not args.no_fallback:
            outcome = await FreeTextAnswerer(llm, database).answer(
                args.question,
                DateRange(start=args.start, end=args.end),
                detail_level=args.detail,
                with_humour=args.humour,
            )
    except GenerationError as exc:
        print(f"Answer generation failed:\n{exc}", file=sys.stderr)
        return 1
    except ExecutionError as exc:
        print(f"Query failed:\n{exc}\n\nSQL:\n{exc.sql}", file=sys.stderr)
        return 1

    if args.json:
        _print_json(outcome.model_dump(mode="json"))
        return 1 if isinstance(outcome, ValidationFailure) else 0

    if isinstance(outcome, ValidationFailure):
        print(f"{outcome.error}:", file=sys.stderr)
        print(f"- reason: {outcome.reason}", file=sys.stderr)
        print(f"\nSQL:\n{outcome.sql}", file=sys.stderr)
        return 1

    print(outcome.answer)
    if outcome.method == "sql":
        print(f"\n- rows: {outcome.row_count}")
        print(f"- execution_time_ms: {outcome.execution_time_ms}")
        print(f"\nSQL:\n{outcome.sql}")
    elif outcome.method == "redirect":
        print(outcome.suggestion)
    return 0


async def _daily_nutrition(args: argparse.Namespace, settings: Settings) -> int:
    from nutrition_nl2sql.db.base import DatabaseError
    from nutrition_nl2sql.db.connection import PostgresDatabase
    from nutrition_nl2sql.db.nutrition import fetch_daily_nutrition

    try:
        rows = await fetch_daily_nutrition(
            PostgresDatabase(settings.postgres_dsn), args.start, args.end
        )
    except DatabaseError as exc:
        print(f"Daily nutrition query failed:\n{exc}", file=sys.stderr)
        return 1

    _print_json({"success": True, "count": len(rows), "data": rows})
    return 0


async def _check_schema(settings: Settings) -> int:
    from nutrition_nl2sql.db.connection import PostgresDatabase
    from nutrition_nl2sql.db.introspect import IntrospectionError, introspect_columns
    from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA
    from nutrition_nl2sql.schema.drift import find_schema_drift

    try:
        live_columns = await introspect_columns(
            PostgresDatabase(settings.postgres_dsn), NUTRITION_SCHEMA
        )
    except IntrospectionError as exc:
        print(f"Schema introspection failed:\n{exc}", file=sys.stderr)
        return 1

    problems = find_schema_drift(NUTRITION_SCHEMA, live_columns)
    if problems:
        print("Schema drift detected:")
        for problem in problems:
            print(f"- {problem}")
        return 1

    print(f"Schema matches descriptor version {NUTRITION_SCHEMA.version}.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.log_level:
        _configure_logging(args.log_level)

    offline = _run_offline_command(args)
    if offline is not None:
        return offline

    from nutrition_nl2sql.config import ConfigError, load_settings

    try:
        settings = load_settings()
        if args.command == "ask":
            settings.validate_llm_requirements()
    except ConfigError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        return 2

    if not args.log_level:
        _configure_logging(settings.log_level)

    if args.command == "config-check":
        redacted = "***" if settings.llm_api_key else "(not set)"
        print("Configuration loaded successfully:")
        print(f"- POSTGRES_DSN: {settings.postgres_dsn}")
        print(f"- LLM_PROVIDER: {settings.llm_provider}")
        print(f"- LLM_MODEL: {settings.llm_model}")
        print(f"- LLM_API_KEY: {redacted}")
        print(f"- LLM_TIMEOUT_SECONDS: {settings.llm_timeout_seconds}")
        print(f"- LOG_LEVEL: {settings.log_level}")
        return 0

    if args.command == "healthcheck":
        from nutrition_nl2sql.db.connection import (
            DatabaseConnectionError,
            check_postgres_health,
        )

        try:
            result = asyncio.run(check_postgres_health(settings.postgres_dsn))
        except DatabaseConnectionError as exc:
            print(f"Healthcheck failed:\n{exc}", file=sys.stderr)
            return 1

        print("PostgreSQL healthcheck succeeded:")
        print(f"- database: {result.current_database}")
        print(f"- user: {result.current_user}")
        print(f"- server_version: {result.server_version}")
        print(f"- transaction_read_only: {result.transaction_read_only}")
        return 0

    if args.command == "check-schema":
        return asyncio.run(_check_schema(settings))

    if args.command == "ask":
        return asyncio.run(_ask(args, settings))

    if args.command == "daily-nutrition":
        if (args.start is None) != (args.end is None):
            print("--from and --to must be given together.", file=sys.stderr)
            return 2
        return asyncio.run(_daily_nutrition(args, settings))

    print(f"Unknown command '{args.command}'.", file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
