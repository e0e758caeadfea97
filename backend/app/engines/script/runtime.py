"""
Script runtime interface and the explicit result of one run.

Any object with ``run(code, data, config)`` is a runtime. ``run_script`` turns
whatever the runtime does (return or raise) into ScriptSuccess | ScriptFailure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Union

from app.models import ScriptReference

from .executor import RestrictedPythonRuntime

logger = logging.getLogger(__name__)


class ScriptRuntime(Protocol):
    def run(
        self, code: str, data: dict[str, Any], config: dict[str, Any] | None = None
    ) -> Any: ...


class UnsupportedLanguageError(LookupError):
    """Raised when no runtime is registered for a script language."""

    pass


@dataclass(frozen=True)
class ScriptSuccess:
    output: Any


@dataclass(frozen=True)
class ScriptFailure:
    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ScriptFailure":
        return cls(kind=type(exc).__name__, message=str(exc))


ScriptResult = Union[ScriptSuccess, ScriptFailure]

_RUNTIMES: dict[str, ScriptRuntime] = {
    "python": RestrictedPythonRuntime(),
}


def get_runtime(language: str) -> ScriptRuntime:
    runtime = _RUNTIMES.get((language or "").lower())
    if runtime is None:
        raise UnsupportedLanguageError(f"No script runtime for language '{language}'")
    return runtime


def run_script(
    script: ScriptReference,
    data: dict[str, Any],
    config: dict[str, Any] | None = None,
    *,
    runtime: ScriptRuntime | None = None,
) -> ScriptResult:
    """Run ``script.code``; never raises for errors coming from the runtime or the script."""
    try:
        rt = runtime if runtime is not None else get_runtime(script.language)
        output = rt.run(script.code, data, config or {})
    except BaseException as exc:  # scripts may raise SystemExit, KeyboardInterrupt
        logger.info("Script %s failed: %s: %s", script.id, type(exc).__name__, exc)
        return ScriptFailure.from_exception(exc)
    return ScriptSuccess(output)
