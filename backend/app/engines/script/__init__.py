"""
Script engine (Python, RestrictedPython).

Exports: RestrictedPythonRuntime, ScriptContext, ScriptRuntime, ScriptSuccess,
ScriptFailure, run_script, get_runtime, compile_script, build_restricted_globals.
"""

from .context import ScriptContext
from .executor import RestrictedPythonRuntime, ScriptTimeoutError
from .runtime import (
    ScriptFailure,
    ScriptResult,
    ScriptRuntime,
    ScriptSuccess,
    UnsupportedLanguageError,
    get_runtime,
    run_script,
)
from .sandbox import build_restricted_globals, compile_script

__all__ = [
    "RestrictedPythonRuntime",
    "ScriptContext",
    "ScriptFailure",
    "ScriptResult",
    "ScriptRuntime",
    "ScriptSuccess",
    "ScriptTimeoutError",
    "UnsupportedLanguageError",
    "build_restricted_globals",
    "compile_script",
    "get_runtime",
    "run_script",
]
