# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""linkinspector CLI."""

from __future__ import annotations

import argparse
import sys

from colorama import just_fix_windows_console

from ..banner import print_banner, print_version
from ..config import (
    JSON_STYLES,
    HttpSettings,
    InspectorSettings,
    load_http_settings,
    load_inspector_settings,
    normalize_json_style,
    parse_duration,
)
from ..errors import ConfigError, LinkInspectorError
from ..inputs import open_targets
from ..log import setup_logging
from ..matchers import FilterSpec
from ..runtime import LinkInspector


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkinspector",
        description=(
            "linkinspector is a command-line tool that analyzes URLs to retrieve HTTP status codes, "
            "content lengths, and content types."
        ),
    )

    source = parser.add_argument_group("Input").add_mutually_exclusive_group()
    source.add_argument("-u", "--target", help="Single URL to check")
    source.add_argument("-l", "--list", dest="list_path", help="File containing list of URLs to check (default: stdin)")

    probes = parser.add_argument_group("Probes")
    probes.add_argument(
        "--passive",
        action="store_true",
        help="Enable passive mode to skip requests for specific extensions",
    )

    matchers = parser.add_argument_group("Matchers")
    matchers.add_argument("-mc", "--match-code", help="Match response with specified status code (e.g., -mc 200,302)")
    matchers.add_argument("-ml", "--match-length", help="Match response with specified content length (e.g., -ml 100,102)")
    matchers.add_argument(
        "-mt",
        "--match-type",
        help='Match response with specified content type (e.g., -mt "application/octet-stream,text/html")',
    )
    matchers.add_argument("-ms", "--match-suffix", help='Match response with specified suffix name (e.g., -ms "zip,php,7z")')

    output = parser.add_argument_group("Output")
    targets = output.add_mutually_exclusive_group()
    targets.add_argument("-o", "--output", help="File to write output results")
    targets.add_argument("--append-output", help="File to append output results instead of overwriting")
    output.add_argument("--json", action="store_true", help="Output in JSON format")
    output.add_argument(
        "--json-type",
        type=normalize_json_style,
        choices=JSON_STYLES,
        default="pretty",
        help="JSON layout: pretty (indented) or compact (one line); MarshalIndent and Marshal are accepted too",
    )

    rate = parser.add_argument_group("Rate-limit")
    rate.add_argument("-t", "--threads", type=int, default=None, help="Number of concurrent requests (default: 50)")

    configuration = parser.add_argument_group("Configurations")
    configuration.add_argument("-H", "--user-agent", default=None, help="Custom User-Agent header for HTTP requests")

    debug = parser.add_argument_group("Debug")
    debug.add_argument("--verbose", action="store_true", help="Prefix each result with its classification mode")
    debug.add_argument("--version", action="store_true", help="Print the version of the tool and exit")
    debug.add_argument("--silent", action="store_true", help="Silent mode (no banner)")
    debug.add_argument("-nc", "--no-color", action="store_true", help="Disable colors in cli output")
    debug.add_argument("--debug", action="store_true", help="Enable debug logging on stderr")

    optimizations = parser.add_argument_group("Optimizations")
    optimizations.add_argument("--timeout", type=float, default=None, help="HTTP request timeout duration in seconds (default: 10)")
    optimizations.add_argument("--insecure", action="store_true", help="Disable TLS certificate verification")
    optimizations.add_argument("--delay", default=None, help="Duration between each HTTP request (e.g., 200ms, 1s)")
    return parser


def build_settings(args: argparse.Namespace) -> tuple[HttpSettings, InspectorSettings]:
    """Merge parsed options over environment-backed defaults."""
    http_settings = load_http_settings()
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {args.timeout}")
        http_settings.timeout = args.timeout
    if args.user_agent is not None:
        http_settings.user_agent = args.user_agent
    if args.insecure:
        http_settings.verify_ssl = False

    defaults = load_inspector_settings()
    settings = InspectorSettings(
        concurrency=args.threads if args.threads is not None else defaults.concurrency,
        delay=parse_duration(args.delay) if args.delay is not None else defaults.delay,
        passive=args.passive,
        verbose=args.verbose,
        color=not args.no_color,
        json_output=args.json,
        json_style=args.json_type,
        output_path=args.append_output or args.output,
        append_output=bool(args.append_output),
        filters=FilterSpec.from_strings(
            status_codes=args.match_code,
            content_lengths=args.match_length,
            content_types=args.match_type,
            suffixes=args.match_suffix,
        ),
    )
    return http_settings, settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.debug else None)

    if args.version:
        print_banner(sys.stdout)
        print_version()
        return 0

    try:
        http_settings, settings = build_settings(args)
    except ConfigError as exc:
        parser.error(str(exc))

    if not args.silent:
        print_banner()
    if settings.color and not settings.json_output:
        just_fix_windows_console()

    try:
        # Inputs open before the output file is truncated.
        with open_targets(args.target, args.list_path) as urls, LinkInspector(settings, http_settings) as inspector:
            inspector.run(urls)
    except LinkInspectorError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
