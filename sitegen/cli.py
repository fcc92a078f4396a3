"""CLI entrypoints for sitegen commands."""

from __future__ import annotations

import argparse
import sys
from typing import List

from .config import DEFAULT_MANIFEST
from .errors import SitegenError
from .logging import configure_logging
from .manifest import Flags, apply_from_manifest
from .models import Stage
from .site import generate_site


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
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_manifests_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "manifests",
        nargs="*",
        help=f"Paths to JSON or YAML manifests (defaults to ./{DEFAULT_MANIFEST}).",
    )


def _add_build_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--no-cleanup", action="store_true", help="Skip the cleanup stage.")
    parser.add_argument("--no-copy", action="store_true", help="Skip the copy stage.")
    parser.add_argument("--no-build", action="store_true", help="Skip the build stage.")
    parser.add_argument(
        "--no-replace",
        action="store_true",
        help="Do not apply the text replacements defined in the manifest.",
    )
    parser.add_argument(
        "--no-gen-index",
        dest="no_generate_index",
        action="store_true",
        help="Do not generate indexes for _index.sitegen markers.",
    )
    parser.add_argument(
        "--min-html",
        dest="minify_html",
        action="store_true",
        help="Minify HTML pages converted from Markdown.",
    )
    parser.add_argument(
        "--min-html-copy",
        dest="minify_html_copy",
        action="store_true",
        help="Minify HTML files that are copied from the source tree.",
    )
    parser.add_argument("--min-css", dest="minify_css", action="store_true", help="Minify CSS files.")
    parser.add_argument("--min-js", dest="minify_js", action="store_true", help="Minify JavaScript files.")
    parser.add_argument("--min-json", dest="minify_json", action="store_true", help="Minify JSON files.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitegen",
        description="Build static sites from Markdown sources described by manifests.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Run cleanup, copy and build for every site in the manifests.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_build_flags(build_parser)
    _add_manifests_argument(build_parser)

    copy_parser = subparsers.add_parser("copy", help="Only perform the declared copies.")
    _add_verbose_option(copy_parser, suppress_default=True)
    _add_manifests_argument(copy_parser)

    for name in ("clean", "cleanup"):
        cleanup_parser = subparsers.add_parser(name, help="Only remove previously copied targets.")
        _add_verbose_option(cleanup_parser, suppress_default=True)
        _add_manifests_argument(cleanup_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Build a single source directory without a manifest.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("src", help="Source directory.")
    generate_parser.add_argument("dst", help="Destination directory.")
    generate_parser.add_argument("--title", default="", help="Fallback page title.")
    generate_parser.add_argument("--url", default="", help="Base URL used for sitemap.xml.")

    return parser


def _flags_from_args(args: argparse.Namespace) -> Flags:
    return Flags(
        no_cleanup=bool(getattr(args, "no_cleanup", False)),
        no_copy=bool(getattr(args, "no_copy", False)),
        no_build=bool(getattr(args, "no_build", False)),
        no_replace=bool(getattr(args, "no_replace", False)),
        no_generate_index=bool(getattr(args, "no_generate_index", False)),
        minify_html=bool(getattr(args, "minify_html", False)),
        minify_html_copy=bool(getattr(args, "minify_html_copy", False)),
        minify_css=bool(getattr(args, "minify_css", False)),
        minify_js=bool(getattr(args, "minify_js", False)),
        minify_json=bool(getattr(args, "minify_json", False)),
    )


def _stages_for(command: str, flags: Flags) -> Stage:
    if command == "copy":
        return Stage.COPY
    if command in ("clean", "cleanup"):
        return Stage.CLEANUP
    return flags.stage()


def main(argv: List[str] | None = None) -> None:
    """CLI entrypoint for sitegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "generate":
        try:
            written = generate_site(args.src, args.dst, args.title, args.url)
        except Exception as exc:
            parser.exit(1, f"sitegen generate failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Wrote {len(written)} file(s) to {args.dst}")
        return

    flags = _flags_from_args(args)
    stages = _stages_for(args.command, flags)
    manifests = args.manifests or [f"./{DEFAULT_MANIFEST}"]

    for manifest in manifests:
        try:
            results = apply_from_manifest(manifest, stages, flags)
        except (SitegenError, OSError) as exc:
            parser.exit(1, f"sitegen {args.command} failed for {manifest}: {exc}\nRun with --verbose for more details.\n")
        for key, written in results.items():
            print(f"{key}: wrote {len(written)} file(s)")


if __name__ == "__main__":
    main(sys.argv[1:])
