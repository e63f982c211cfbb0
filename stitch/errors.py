"""
errors.py

Responsibility: The error taxonomy shared by every stage of a build.

Every error is fatal for the whole pass. Library code raises (and chains the
underlying cause); only the CLI catches `StitchError` and reports it.
"""

from __future__ import annotations


class StitchError(RuntimeError):
    pass


class UnreadableSource(StitchError):
    """A component file or the root document could not be read or parsed."""


class OutputError(StitchError):
    """The rendered markup could not be written."""


class MissingComponentWrapper(StitchError):
    """A document has no top-level `<component>` element."""


class MalformedStyleBlock(StitchError):
    """A top-level `<style>` element does not hold a text child."""


class EvaluationError(StitchError):
    def __init__(self, expression: str, message: str) -> None:
        super().__init__(f"Failed evaluating {{{expression}}}: {message}")
        self.expression = expression


class RecursionLimitExceeded(StitchError):
    def __init__(self, chain: list[str]) -> None:
        if chain:
            message = f"Component inlining too deep: {' -> '.join(chain)}"
        else:
            message = "Component inlining exhausted the interpreter recursion limit"
        super().__init__(message)
        self.chain = chain


class ConfigError(StitchError, ValueError):
    pass
