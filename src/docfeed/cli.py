"""CLI for docfeed - anchor recording and proxy serialization for content connectors."""

import argparse
import json
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.link_extractor import extractor_for
from .core.identity import GroupMemberships, Password, Principal
from .feed.headers import ANCHOR_HEADER, anchor_header
from .response import RecordingResponse
from .runtime import build_runtime

KINDS = {
    "principal": Principal,
    "password": Password,
    "groups": GroupMemberships,
}


def version_string() -> str:
    return (
        f"docfeed {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def cmd_anchors(args: argparse.Namespace, rt: Any) -> int:
    """Extract anchors from a Markdown or HTML file."""
    path: Path = args.file
    content = path.read_text(encoding="utf-8")

    base_url = args.base or rt.config.anchors.base_url
    extractor = extractor_for(path, base_url, rt.config.anchors.skip_fragments)

    response = RecordingResponse()
    extractor.extract(content, response)
    anchors = response.anchors

    if args.header:
        value = anchor_header(anchors)
        print(f"{ANCHOR_HEADER}: {value}" if not args.quiet else value)
    elif args.json:
        out = {
            "entries": [{"text": e.text, "uri": e.uri} for e in anchors.entries()],
            "keys": list(anchors.key_set()),
        }
        print(json.dumps(out, indent=2, ensure_ascii=False))
    else:
        for entry in anchors.entries():
            text = "-" if entry.text is None else entry.text
            print(f"{text}\t{entry.uri}")

    return 0


def cmd_convert(args: argparse.Namespace, rt: Any) -> int:
    """Decode a serialized identity value and re-emit it in the configured format."""
    path: Path = args.file
    tp = KINDS[args.kind]
    fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"

    value = rt.codec.loads(path.read_text(encoding="utf-8"), tp, fmt=fmt)
    if not args.quiet:
        print(f"Decoded {value!r}", file=sys.stderr)
    print(rt.codec.dumps(value, tp, fmt=args.to).rstrip("\n"))
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docfeed", description="Docfeed CLI"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/docfeed.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # anchors command
    parser_anchors = subparsers.add_parser("anchors", help="List links found in a document")
    parser_anchors.add_argument("file", type=Path, help="Markdown or HTML file")
    parser_anchors.add_argument("--base", default=None, help="Base URL for relative links")
    output = parser_anchors.add_mutually_exclusive_group()
    output.add_argument("--header", action="store_true", help="Print the feed anchor header")
    output.add_argument("--json", action="store_true", help="Machine-readable output")

    # convert command
    parser_convert = subparsers.add_parser("convert", help="Round-trip a serialized value")
    parser_convert.add_argument("kind", choices=sorted(KINDS), help="Value type")
    parser_convert.add_argument("file", type=Path, help="JSON or YAML file")
    parser_convert.add_argument(
        "--to", choices=["json", "yaml"], default=None,
        help="Output format (default: codec.format from config)"
    )

    args = parser.parse_args()

    handlers = {
        "anchors": cmd_anchors,
        "convert": cmd_convert,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)

    try:
        rt = build_runtime(config_path=args.config)
        exit_code = handler(args, rt)
        sys.exit(exit_code)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
