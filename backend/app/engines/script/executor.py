"""
RestrictedPythonRuntime: run(code, data, config) -> output.

Compiles with RestrictedPython and runs in the sandbox. If the script defines
``execute(data, config)`` its return value is the output; otherwise the global
``result`` is returned (None when unset).
Optional: SCRIPT_EXEC_TIMEOUT (or config["timeout"]) aborts long-running scripts
via signal.SIGALRM, on Unix and only on the main thread.
Optional: SCRIPT_EXTRA_MODULES (comma-separated) exposes whitelisted modules (e.g. pandas) in script globals.
"""

import importlib
import logging
import re
import signal
import threading
from collections.abc import Callable
from typing import Any

from app.core.config import settings

from .context import ScriptContext
from .sandbox import build_restricted_globals, compile_script

logger = logging.getLogger(__name__)

# Only allow top-level module names (e.g. pandas, numpy), no submodules
_SAFE_MODULE_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ScriptTimeoutError(TimeoutError):
    """Raised when script execution exceeds its timeout."""

    pass


def _inject_extra_modules(g: dict[str, Any]) -> None:
    """Inject whitelisted extra modules into script globals. Scripts cannot import; only names in SCRIPT_EXTRA_MODULES are available."""
    raw = (settings.SCRIPT_EXTRA_MODULES or "").strip()
    if not raw:
        return
    for name in (s.strip() for s in raw.split(",") if s.strip()):
        if not _SAFE_MODULE_NAME_RE.match(name):
            continue
        try:
            g[name] = importlib.import_module(name)
        except ImportError:
            logger.warning("SCRIPT_EXTRA_MODULES: cannot import %s, skipping", name)


def _call_with_timeout(fn: Callable[[], Any], timeout_sec: int) -> Any:
    """Call fn() under signal.SIGALRM. Unix main thread only."""
    def _handler(signum: int, frame: Any) -> None:
        raise ScriptTimeoutError(f"Script execution timed out after {timeout_sec}s")

    old = signal.signal(signal.SIGALRM, _handler)
    try:
        signal.alarm(timeout_sec)
        try:
            return fn()
        finally:
            signal.alarm(0)
    finally:
        signal.signal(signal.SIGALRM, old)


def _resolve_timeout(config: dict[str, Any]) -> int | None:
    timeout = config.get("timeout", settings.SCRIPT_EXEC_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        return None
    return timeout


def _can_use_alarm() -> bool:
    return (
        hasattr(signal, "SIGALRM")
        and threading.current_thread() is threading.main_thread()
    )


class RestrictedPythonRuntime:
    """Runs Python scripts in a RestrictedPython sandbox."""

    language = "python"

    def run(
        self,
        code: str,
        data: dict[str, Any],
        config: dict[str, Any] | None = None,
    ) -> Any:
        """
        Compile code, exec in restricted globals, return the script output.
        Errors raised by compilation or by the script propagate to the caller.
        """
        config = config or {}
        context = ScriptContext(data=data, config=config)
        compiled = compile_script(code)
        g = build_restricted_globals(context)
        _inject_extra_modules(g)

        def _run() -> Any:
            exec(compiled, g)  # noqa: S102 - RestrictedPython compiled code
            execute_fn = g.get("execute")
            if callable(execute_fn):
                return execute_fn(data, config)
            return g.get("result")

        timeout = _resolve_timeout(config)
        if timeout is not None and _can_use_alarm():
            return _call_with_timeout(_run, timeout)
        return _run()
