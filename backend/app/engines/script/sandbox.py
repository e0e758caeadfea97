"""
Restricted namespace for user scripts.

A script sees its run context (``data``, ``config``, ``log``, ``result``) and a
data-shaping toolbox: RestrictedPython's safe and utility builtins, the
collection helpers below, ``json`` and the datetime types. Imports, file
access, ``exec``/``eval`` and underscore attributes are refused at compile
time or by the guards.
"""

import builtins
import json
import operator
from datetime import date, datetime, time, timedelta
from typing import Any

from RestrictedPython import compile_restricted, safe_builtins, utility_builtins
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safer_getattr,
)
from RestrictedPython.PrintCollector import PrintCollector

from .context import ScriptContext

# Collection helpers form payloads are shaped with; absent from safe_builtins.
_DATA_BUILTINS = (
    "dict", "list", "enumerate", "min", "max", "sum", "any", "all", "map", "filter", "reversed",
)

_HELPERS: dict[str, Any] = {
    "json": json,
    "datetime": datetime,
    "date": date,
    "time": time,
    "timedelta": timedelta,
}

_INPLACE_OPS = {
    "+=": operator.iadd,
    "-=": operator.isub,
    "*=": operator.imul,
    "/=": operator.itruediv,
    "//=": operator.ifloordiv,
    "%=": operator.imod,
    "**=": operator.ipow,
    "|=": operator.ior,
    "&=": operator.iand,
}


def _inplacevar(op: str, target: Any, value: Any) -> Any:
    fn = _INPLACE_OPS.get(op)
    if fn is None:
        raise TypeError(f"Augmented assignment '{op}' is not allowed in scripts")
    return fn(target, value)


def _script_builtins() -> dict[str, Any]:
    table: dict[str, Any] = dict(safe_builtins)
    table.update(utility_builtins)
    for name in _DATA_BUILTINS:
        table[name] = getattr(builtins, name)
    return table


def compile_script(script: str, filename: str = "<script>") -> Any:
    """Compile with RestrictedPython; SyntaxError lists every violation found."""
    result = compile_restricted(script, filename, "exec")
    if result is None:
        raise SyntaxError("RestrictedPython: compile failed")
    return result


def build_restricted_globals(context: ScriptContext) -> dict[str, Any]:
    """Globals for ``exec(compile_script(code), g)`` over one run context."""
    g: dict[str, Any] = {
        "__builtins__": _script_builtins(),
        "__name__": "script",
        "_getattr_": safer_getattr,
        "_getitem_": default_guarded_getitem,
        "_getiter_": default_guarded_getiter,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_write_": full_write_guard,
        "_inplacevar_": _inplacevar,
        "_print_": PrintCollector,
    }
    g.update(_HELPERS)
    g.update(context.to_dict())
    return g
