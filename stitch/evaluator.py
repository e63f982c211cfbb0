"""
evaluator.py

Responsibility: Evaluate one `{...}` expression against a binding mapping.

Expressions are Jinja2 expressions run in a sandboxed environment. Every call
builds its own sandbox, with no template cache, and drops it on return; nothing
from one expression (bindings, compiled code, errors) reaches the next.
"""

from __future__ import annotations

from collections.abc import Mapping

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

from stitch.errors import EvaluationError
from stitch.log import get_logger

log = get_logger(__name__)

# Names the Jinja lexer treats as operators or literals; a binding with one of
# these names could never be referenced from an expression.
RESERVED_NAMES = frozenset(
    {"and", "or", "not", "in", "is", "if", "else", "true", "false", "none", "True", "False", "None"}
)


def check_binding_names(expression: str, bindings: Mapping[str, str]) -> None:
    for name in bindings:
        if not name.isidentifier() or name in RESERVED_NAMES:
            raise EvaluationError(expression, f"binding name {name!r} is not a valid identifier")


class Evaluator:
    """Evaluates expressions; stateless, one sandbox per call."""

    def evaluate(self, expression: str, bindings: Mapping[str, str]) -> str:
        check_binding_names(expression, bindings)
        if not expression.strip():
            raise EvaluationError(expression, "empty expression")

        env = SandboxedEnvironment(undefined=StrictUndefined, autoescape=False, cache_size=0)
        try:
            compiled = env.compile_expression(expression, undefined_to_none=False)
            result = str(compiled(**bindings))
        except Exception as e:  # noqa: BLE001 - surface as EvaluationError
            raise EvaluationError(expression, f"{type(e).__name__}: {e}") from e

        log.debug("Evaluated {%s} -> %r", expression, result)
        return result


_default = Evaluator()


def evaluate(expression: str, bindings: Mapping[str, str]) -> str:
    return _default.evaluate(expression, bindings)
