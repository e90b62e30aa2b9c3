from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from source_context_filter.core.configuration import (
    apply_environment_overrides,
    load_configuration,
    resolve_env_prefix,
)
from source_context_filter.core.decision import describe, explain
from source_context_filter.core.factory import from_configuration
from source_context_filter.core.models import LogEvent, LogEventLevel


def _parse_level(s: str) -> LogEventLevel:
    try:
        return LogEventLevel.from_name(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Check which log events pass per-category minimum levels."
    )
    p.add_argument("config_path", help="JSON configuration file with a Logging section")
    p.add_argument(
        "source_contexts",
        nargs="*",
        help="Source contexts to check (e.g., MyApp.Billing). None: check an event without one",
    )
    p.add_argument(
        "--level",
        type=_parse_level,
        default=LogEventLevel.INFORMATION,
        help="Event level (Verbose, Debug, Information, Warning, Error, Fatal). Default: Information",
    )
    p.add_argument("--sink", default=None, help="Use Logging:<sink>:LogLevel instead of Logging:LogLevel")
    p.add_argument("--describe", action="store_true", help="Print the effective rules and exit")
    p.add_argument("--no-env", action="store_true", help="Ignore environment variable overrides")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    try:
        config = load_configuration(args.config_path)
        if not args.no_env:
            config = apply_environment_overrides(config, prefix=resolve_env_prefix())
        source_context_filter = from_configuration(config, args.sink)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if args.describe:
        description = describe(source_context_filter)
        print(f"Default: {description.default_level.display_name}")
        for rule in description.rules:
            print(f"{rule.source_context}: {rule.minimum_level.display_name}")
        return

    events = [LogEvent.for_source_context(sc, args.level) for sc in args.source_contexts]
    if not events:
        events = [LogEvent(level=args.level)]

    for event in events:
        d = explain(source_context_filter, event)
        verdict = "enabled" if d.enabled else "suppressed"
        rule = d.matched_rule if d.matched_rule is not None else "Default"
        print(
            f"{d.source_context or '-'} [{d.level.display_name}] {verdict} "
            f"(rule: {rule}, minimum: {d.minimum_level.display_name})"
        )


if __name__ == "__main__":
    main()
