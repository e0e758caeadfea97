"""
ScriptContext: names injected into the script namespace (data, config, log, result).
"""

import logging
from types import SimpleNamespace
from typing import Any

logger = logging.getLogger("app.engines.script.user")


def make_log_module(
    *,
    logger_instance: logging.Logger | None = None,
    extra: dict[str, Any] | None = None,
) -> Any:
    """Build the `log` object: info, warn, error, debug. extra is passed to logger as context."""
    log = logger_instance or logger
    ext = extra or {}

    def _log(level: int, msg: str, *args: Any) -> None:
        log.log(level, msg, *args, extra=ext or None)

    def info(msg: str, *args: Any) -> None:
        _log(logging.INFO, msg, *args)

    def warn(msg: str, *args: Any) -> None:
        _log(logging.WARNING, msg, *args)

    def error(msg: str, *args: Any) -> None:
        _log(logging.ERROR, msg, *args)

    def debug(msg: str, *args: Any) -> None:
        _log(logging.DEBUG, msg, *args)

    return SimpleNamespace(info=info, warn=warn, error=error, debug=debug)


class ScriptContext:
    """Input data and configuration for one script run, plus a `log` helper."""

    def __init__(
        self,
        *,
        data: dict[str, Any],
        config: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
        log_extra: dict[str, Any] | None = None,
    ) -> None:
        self.data = data
        self.config = config or {}
        self.log = make_log_module(logger_instance=logger, extra=log_extra)

    def to_dict(self) -> dict[str, Any]:
        """Namespace for exec(compiled, globals): data, config, log, result."""
        return {
            "data": self.data,
            "config": self.config,
            "log": self.log,
            "result": None,
        }
