"""
cli.py

Responsibility: CLI entrypoint for stitch.

High-level flow (single command `build`):
1) Load settings (YAML file, then CLI overrides) -> `BuildConfig`
2) Index component files -> registry
3) Parse the root document, re-tag its `<component>` wrapper
4) Inline components and evaluate expressions
5) Render and write the markup (stdout or a file)

Nothing is written unless the whole build succeeds.

This module orchestrates; each concern lives in its own module:
- Settings: `config.py`
- Components: `registry.py`
- Expansion: `engine.py`
- Output: `renderer.py`
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import cast

from stitch.config import BuildConfig, load_config
from stitch.engine import Expander
from stitch.errors import OutputError, StitchError
from stitch.log import get_logger, setup_logging
from stitch.nodes import Element, Text, retag
from stitch.parser import parse_file
from stitch.registry import Registry, build_registry, extract_style, find_wrapper, iter_component_files
from stitch.renderer import render

log = get_logger(__name__)


def _collect_styles(registry: Registry, index_style: str | None) -> str:
    styles = [index_style] if index_style else []
    styles.extend(c.style for c in registry.values() if c.style)
    return "\n".join(s.strip("\n") for s in styles)


def build_site(config: BuildConfig) -> str:
    """Run a full build and return the rendered markup."""
    registry = build_registry(iter_component_files(config.components_dir, config.extensions))

    log.info("Processing: %s", config.index)
    nodes = parse_file(config.index)
    root = retag(find_wrapper(nodes, source=str(config.index)), config.root_tag)

    expander = Expander(registry, max_depth=config.max_depth)
    result = cast(Element, expander.substitute(root, {}))

    if config.inline_styles:
        css = _collect_styles(registry, extract_style(nodes, source=str(config.index)))
        if css:
            result = result.with_children((Element("style", (), (Text(css),)), *result.children))

    return render(result)


def _write_output(markup: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(markup + "\n")
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup + "\n", encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputError(f"Cannot write output file: {output}") from e
    log.info("Wrote %s", output)


def _apply_overrides(config: BuildConfig, args: argparse.Namespace) -> BuildConfig:
    overrides: dict[str, object] = {}
    if args.components_dir is not None:
        overrides["components_dir"] = Path(args.components_dir)
    if args.index is not None:
        overrides["index"] = Path(args.index)
    if args.output is not None:
        overrides["output"] = Path(args.output)
    if args.root_tag is not None:
        overrides["root_tag"] = args.root_tag.lower()
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth or None
    if args.inline_styles is not None:
        overrides["inline_styles"] = args.inline_styles
    return dataclasses.replace(config, **overrides)


def build_cmd(args: argparse.Namespace) -> int:
    config = _apply_overrides(load_config(args.config), args)
    markup = build_site(config)
    _write_output(markup, config.output)
    return 0


def _log_level(args: argparse.Namespace) -> str:
    if args.log_level:
        return args.log_level.upper()
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "WARNING"
    return "INFO"


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return value


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stitch", description="stitch - inline HTML components into a single page")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every inlining and evaluation")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    verbosity.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        type=str.lower,
        help="Explicit log level",
    )
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Expand the root document and write the markup")
    b.add_argument("--config", default=None, help="YAML settings file (default: ./stitch.yaml if present)")
    b.add_argument("--components-dir", default=None, help="Directory of component files (default: components)")
    b.add_argument("--index", default=None, help="Root document (default: index.html)")
    b.add_argument("--output", "-o", default=None, help="Write markup to this file instead of stdout")
    b.add_argument("--root-tag", default=None, help="Tag the root <component> is renamed to (default: body)")
    b.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help="Maximum component nesting depth (0 disables the limit; default: 64)",
    )
    b.add_argument(
        "--inline-styles",
        dest="inline_styles",
        action="store_true",
        default=None,
        help="Prepend a <style> element with the collected component styles",
    )
    b.add_argument(
        "--no-inline-styles",
        dest="inline_styles",
        action="store_false",
        help="Do not emit collected styles",
    )

    b.set_defaults(func=build_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(_log_level(args))
    try:
        return int(args.func(args))
    except StitchError as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
