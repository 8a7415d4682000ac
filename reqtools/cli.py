"""
Command Line Interface

Usage:
    python -m reqtools curl-parse command.txt
    python -m reqtools curl-generate request.json
    python -m reqtools env-import production.env --format env
    python -m reqtools env-export environments.json --format postman -o out.json
    python -m reqtools serve --port 8765
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import config
from .config_manager import ToolkitConfig
from .curl import generate_curl_command, generate_request_name, parse_curl_command, parse_curl_commands
from .environment import EXPORT_FORMATS, EnvironmentExporter, detect_and_parse, get_registry
from .environment.json_format import JsonStrategy
from .exceptions import ReqToolsError
from .models import ParsedRequest

logger = logging.getLogger(__name__)


def read_input(path: str) -> str:
    """Read a file, or stdin when path is "-"."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_output(text: str, path: Optional[str] = None):
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


def split_commands(text: str) -> List[str]:
    """Split text into commands separated by blank lines"""
    commands = []
    current = []
    for line in text.splitlines():
        if line.strip():
            current.append(line)
        elif current:
            commands.append("\n".join(current))
            current = []
    if current:
        commands.append("\n".join(current))
    return commands


def cmd_curl_parse(args) -> int:
    text = read_input(args.input)

    if args.bulk:
        outcomes = parse_curl_commands(split_commands(text))
        results = []
        for outcome in outcomes:
            result = outcome.to_dict()
            if outcome.request is not None:
                result["request"]["name"] = generate_request_name(outcome.request.method, outcome.request.url)
            else:
                print(f"Command {outcome.index}: {outcome.error}", file=sys.stderr)
            results.append(result)
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return 0 if all(o.success for o in outcomes) else 1

    request = parse_curl_command(text)
    payload = request.to_dict()
    payload["name"] = generate_request_name(request.method, request.url)
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def cmd_curl_generate(args) -> int:
    try:
        data = json.loads(read_input(args.input))
    except ValueError as e:
        print(f"Error: request is not valid JSON: {e}", file=sys.stderr)
        return 1
    print(generate_curl_command(ParsedRequest.from_dict(data), width=args.width))
    return 0


def cmd_env_detect(args) -> int:
    detection = get_registry().detect_format(read_input(args.input))
    print(json.dumps(detection.to_dict(), indent=2))
    return 0 if detection.is_valid else 1


def cmd_env_import(args) -> int:
    source_name = None if args.input == "-" else args.input
    result = detect_and_parse(read_input(args.input), format_name=args.format, source_name=source_name)

    for warning in result.validation.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    for error in result.validation.errors:
        print(f"Error: {error}", file=sys.stderr)

    write_output(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), args.output)
    return 0 if result.is_valid else 1


def cmd_env_export(args) -> int:
    # Input is native JSON, as written by `env-export --format json`
    environments = JsonStrategy().parse(read_input(args.input))
    if not environments:
        print("Error: No environments to export", file=sys.stderr)
        return 1

    exporter = EnvironmentExporter()
    content = exporter.generate(environments, args.format)
    output = args.output
    if output == "auto":
        output = exporter.generate_filename(args.format, len(environments))
    write_output(content, output)
    if output and not args.quiet:
        print(f"Exported {len(environments)} environment(s) to {output}", file=sys.stderr)
    return 0


def cmd_serve(args) -> int:
    import uvicorn
    uvicorn.run("reqtools.server:app", host=args.host, port=args.port, reload=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqtools",
        description="cURL conversion and environment import/export tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reqtools curl-parse command.txt
  echo "curl https://api.example.com/users?page=1" | reqtools curl-parse -
  reqtools curl-parse --bulk commands.txt
  reqtools curl-generate request.json --width 100
  reqtools env-detect postman_environment.json
  reqtools env-import staging.env
  reqtools env-export environments.json --format env -o auto
  reqtools serve --port 8765
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("curl-parse", help="Parse a curl command into a request (JSON)")
    p.add_argument("input", help="File containing the command, or - for stdin")
    p.add_argument(
        "--bulk",
        action="store_true",
        help="Input holds several commands separated by blank lines"
    )
    p.set_defaults(func=cmd_curl_parse)

    p = sub.add_parser("curl-generate", help="Render a request (JSON) as a curl command")
    p.add_argument("input", help="File containing the request JSON, or - for stdin")
    p.add_argument(
        "--width",
        type=int,
        default=None,
        help=f"Wrap column (default: {config.CURL_WRAP_WIDTH})"
    )
    p.set_defaults(func=cmd_curl_generate)

    p = sub.add_parser("env-detect", help="Detect the format of an environment file")
    p.add_argument("input", help="Environment file, or - for stdin")
    p.set_defaults(func=cmd_env_detect)

    p = sub.add_parser("env-import", help="Import environments from a file")
    p.add_argument("input", help="Environment file, or - for stdin")
    p.add_argument(
        "-f", "--format",
        default=None,
        help=f"Format name or 'auto' (default: {config.DEFAULT_IMPORT_FORMAT})"
    )
    p.add_argument("-o", "--output", help="Write the result JSON to this file")
    p.set_defaults(func=cmd_env_import)

    p = sub.add_parser("env-export", help="Export native JSON environments to another format")
    p.add_argument("input", help="Native JSON environments file, or - for stdin")
    p.add_argument(
        "-f", "--format",
        required=True,
        choices=EXPORT_FORMATS,
        help="Output format"
    )
    p.add_argument(
        "-o", "--output",
        help="Output file path; 'auto' picks environment(s)-YYYY-MM-DD.<ext>"
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output"
    )
    p.set_defaults(func=cmd_env_export)

    p = sub.add_parser("serve", help="Run the HTTP API server")
    p.add_argument("--host", default=None, help=f"Bind address (default: {config.API_HOST})")
    p.add_argument("--port", type=int, default=None, help=f"Port (default: {config.API_PORT})")
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        toolkit_config = ToolkitConfig(
            wrap_width=getattr(args, "width", None),
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
            log_level="DEBUG" if args.verbose else None,
        )
        toolkit_config.apply()
        logging.basicConfig(
            level=toolkit_config.logging_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if args.command == "serve":
            args.host, args.port = toolkit_config.host, toolkit_config.port
        logger.debug("Running %s", args.command)
        return args.func(args)

    except ReqToolsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
