"""Command-line interface for PropSmith."""

import argparse
import json
import logging
import sys

import uvicorn

from .config import settings
from .placeholders import PlaceholderError
from .sources import (
    DotenvPropertySource,
    EnvironmentPropertySource,
    MapPropertySource,
    PropertySources,
)


def _parse_assignment(value: str) -> tuple[str, str]:
    """Parse a KEY=VALUE argument."""
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{value}'")
    return key, val


def _add_syntax_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--prefix", default=settings.placeholder_prefix,
        help=f"Placeholder prefix (default: {settings.placeholder_prefix})",
    )
    parser.add_argument(
        "--suffix", default=settings.placeholder_suffix,
        help=f"Placeholder suffix (default: {settings.placeholder_suffix})",
    )
    parser.add_argument(
        "--separator", default=settings.value_separator,
        help=f"Separator between key and default value (default: {settings.value_separator})",
    )
    parser.add_argument(
        "--no-separator", action="store_true", help="Disable inline default values"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="PropSmith - Placeholder resolution for configuration text"
    )
    parser.add_argument(
        "--log-level", default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve placeholders in text")
    resolve_parser.add_argument("text", nargs="?", help="Text to resolve (default: read stdin)")
    resolve_parser.add_argument(
        "--set", "-s", dest="assignments", action="append", default=[],
        type=_parse_assignment, metavar="KEY=VALUE",
        help="Property value, highest precedence (repeatable)",
    )
    resolve_parser.add_argument(
        "--env-file", dest="env_files", action="append", default=[], metavar="PATH",
        help="Load properties from a .env file (repeatable, earlier files win)",
    )
    resolve_parser.add_argument(
        "--env", action="store_true", help="Fall back to process environment variables"
    )
    resolve_parser.add_argument(
        "--strict", action="store_true", help="Fail on unresolvable placeholders"
    )
    resolve_parser.add_argument(
        "--max-depth", type=int, default=settings.max_depth,
        help="Maximum nesting depth (default: unlimited)",
    )
    _add_syntax_arguments(resolve_parser)

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="List placeholders found in text")
    parse_parser.add_argument("text", nargs="?", help="Text to parse (default: read stdin)")
    _add_syntax_arguments(parse_parser)

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "resolve":
        sys.exit(run_resolve(args))
    elif args.command == "parse":
        sys.exit(run_parse(args))
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()
        sys.exit(1)


def _read_text(text):
    if text is not None:
        return text
    return sys.stdin.read()


def _syntax_options(args) -> dict:
    return {
        "prefix": args.prefix,
        "suffix": args.suffix,
        "separator": None if args.no_separator else args.separator,
    }


def build_sources(args) -> PropertySources:
    """Assemble property sources from CLI arguments in precedence order."""
    sources = PropertySources()
    if args.assignments:
        sources.add_last(MapPropertySource("command-line", dict(args.assignments)))
    for path in args.env_files:
        sources.add_last(DotenvPropertySource(path))
    if args.env:
        sources.add_last(EnvironmentPropertySource())
    return sources


def run_resolve(args) -> int:
    """Resolve placeholders and print the result."""
    try:
        resolver = settings.build_resolver(
            ignore_unresolvable=not args.strict,
            max_depth=args.max_depth,
            **_syntax_options(args),
        )
        sources = build_sources(args)
        result = resolver.resolve(_read_text(args.text), sources)
    except (PlaceholderError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(result)
    if not result.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def run_parse(args) -> int:
    """Print the placeholders found in text as JSON."""
    try:
        resolver = settings.build_resolver(**_syntax_options(args))
    except PlaceholderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = _read_text(args.text)
    placeholders = resolver.parser.extract_placeholders(text)
    validation = resolver.parser.validate_syntax(text)
    print(
        json.dumps(
            {
                "placeholders": [p.model_dump() for p in placeholders],
                "validation": validation.model_dump(),
            },
            indent=2,
        )
    )
    return 0 if validation.valid else 1


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "propsmith.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    main()
