"""
stitch package

This package implements stitch, a static HTML component inliner, as a CLI-first utility.

Key responsibilities are split across modules:
- `nodes.py`: the immutable markup tree (Text / Element / Other)
- `parser.py`: markup text -> tree
- `evaluator.py`: sandboxed evaluation of `{...}` expressions
- `registry.py`: component files -> read-only name -> Component mapping
- `engine.py`: recursive component inlining with call-site scoped bindings
- `renderer.py`: tree -> markup text
- `config.py`: YAML settings file
- `cli.py`: CLI entrypoint and orchestration (config -> registry -> expand -> render -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
