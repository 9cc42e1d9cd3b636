"""CLI entrypoints for oasgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import (
    ConfigError,
    GeneratorOptions,
    HeterogeneousArraySpecifier,
    OAuthConfig,
    OasGenConfig,
    OpenAPIVersion,
    load_config,
)
from .generator import OpenAPIGenerator
from .logging import configure_logging, get_logger
from .sources import load_discovery


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .oasgen.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oasgen",
        description="Generate OpenAPI documents from server discovery documents.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Translate a discovery document into an OpenAPI document.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Discovery endpoint URL or JSON file (defaults to the configured discovery URL).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write the OpenAPI document to (defaults to stdout).",
    )
    generate_parser.add_argument(
        "--openapi-version",
        choices=[member.value for member in OpenAPIVersion],
        default=None,
        help="OpenAPI version of the generated document.",
    )
    generate_parser.add_argument(
        "--api-version",
        default=None,
        help="Version string for the info object of the generated document.",
    )
    generate_parser.add_argument(
        "--server",
        action="append",
        default=None,
        help="Server URL to list in the document (repeat for several servers).",
    )
    generate_parser.add_argument(
        "--heterogeneous-array",
        choices=[member.value for member in HeterogeneousArraySpecifier],
        default=None,
        help="Keyword for heterogeneous array items in 3.0.3 documents.",
    )
    generate_parser.add_argument(
        "--async",
        dest="async_interface",
        action="store_true",
        default=None,
        help="Include the asynchronous request interface.",
    )
    generate_parser.add_argument(
        "--oauth",
        action="store_true",
        default=None,
        help="Include an OAuth authorization-code security scheme.",
    )
    generate_parser.add_argument("--authorization-url", default=None, help="OAuth authorization URL.")
    generate_parser.add_argument("--token-url", default=None, help="OAuth token URL.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve OpenAPI documents for the configured discovery endpoint over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind to.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _resolve_options(args: argparse.Namespace, config: OasGenConfig) -> GeneratorOptions:
    base = config.options
    oauth = base.oauth
    if args.oauth or args.authorization_url or args.token_url:
        oauth = OAuthConfig(
            enabled=bool(args.oauth) or oauth.enabled,
            authorization_url=args.authorization_url or oauth.authorization_url,
            token_url=args.token_url or oauth.token_url,
        )
    return base.with_overrides(
        openapi_version=OpenAPIVersion(args.openapi_version) if args.openapi_version else None,
        version=args.api_version,
        servers=tuple(args.server) if args.server else None,
        heterogeneous_array=(
            HeterogeneousArraySpecifier(args.heterogeneous_array)
            if args.heterogeneous_array
            else None
        ),
        async_interface=args.async_interface,
        oauth=oauth,
    )


def _run_generate(args: argparse.Namespace, config: OasGenConfig) -> str:
    options = _resolve_options(args, config)
    source = args.source or config.source.url
    discovery = load_discovery(source, timeout=config.source.timeout)
    return OpenAPIGenerator(options).generate(discovery)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for oasgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if args.command == "generate":
        try:
            document = _run_generate(args, config)
            if args.output:
                output = Path(args.output)
                output.write_text(document, encoding="utf-8")
                logger.info("OpenAPI document written to %s", _relativize(output))
            else:
                sys.stdout.write(document)
        except (OSError, RuntimeError) as exc:
            parser.exit(1, f"oasgen generate failed: {exc}\nRun with --verbose for more details.\n")
    elif args.command == "serve":
        from .service import run_service

        try:
            run_service(host=args.host, port=args.port, config=config)
        except RuntimeError as exc:
            parser.exit(1, f"oasgen serve failed: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
