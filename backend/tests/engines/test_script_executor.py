"""Unit tests for engines.script: RestrictedPythonRuntime, context and run_script."""

import logging
import signal
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from app.engines.script import (
    RestrictedPythonRuntime,
    ScriptContext,
    ScriptFailure,
    ScriptSuccess,
    ScriptTimeoutError,
    UnsupportedLanguageError,
    get_runtime,
    run_script,
)
from app.models import ScriptReference


class TestRestrictedPythonRuntime:
    def test_result_global(self) -> None:
        out = RestrictedPythonRuntime().run("result = [1, 2, 3]", {})
        assert out == [1, 2, 3]

    def test_reads_data(self) -> None:
        out = RestrictedPythonRuntime().run(
            "result = [x * 2 for x in data.get('ids', [])]", {"ids": [1, 2, 3]}
        )
        assert out == [2, 4, 6]

    def test_execute_function_style(self) -> None:
        """When the script defines execute(data, config), its return value is used."""
        script = (
            "def execute(data, config):\n"
            "    return {'sum': data['a'] + data['b'], 'mode': config.get('mode')}\n"
        )
        out = RestrictedPythonRuntime().run(script, {"a": 1, "b": 2}, {"mode": "x"})
        assert out == {"sum": 3, "mode": "x"}

    def test_no_result_returns_none(self) -> None:
        assert RestrictedPythonRuntime().run("x = 1", {}) is None

    def test_open_blocked(self) -> None:
        with pytest.raises(NameError, match="open"):
            RestrictedPythonRuntime().run("result = open('/etc/passwd')", {})

    def test_import_blocked(self) -> None:
        with pytest.raises(ImportError):
            RestrictedPythonRuntime().run("import os\nresult = os.getcwd()", {})

    def test_script_error_propagates(self) -> None:
        with pytest.raises(ZeroDivisionError):
            RestrictedPythonRuntime().run("result = 1 / 0", {})

    @patch("app.engines.script.executor.settings")
    def test_extra_modules_injected(self, mock_settings: MagicMock) -> None:
        mock_settings.SCRIPT_EXTRA_MODULES = "math, not-valid, no_such_module_xyz"
        mock_settings.SCRIPT_EXEC_TIMEOUT = None
        out = RestrictedPythonRuntime().run("result = math.floor(2.7)", {})
        assert out == 2


@patch("app.engines.script.executor.settings")
@pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM not available (e.g. Windows)")
def test_runtime_timeout_raises(mock_settings: MagicMock) -> None:
    """When SCRIPT_EXEC_TIMEOUT is set, a long-running script raises ScriptTimeoutError."""
    mock_settings.SCRIPT_EXEC_TIMEOUT = 1
    mock_settings.SCRIPT_EXTRA_MODULES = None
    with pytest.raises(ScriptTimeoutError, match="timed out"):
        RestrictedPythonRuntime().run("while True: pass", {})


@patch("app.engines.script.executor.settings")
@pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="SIGALRM not available (e.g. Windows)")
def test_config_timeout_overrides_settings(mock_settings: MagicMock) -> None:
    mock_settings.SCRIPT_EXEC_TIMEOUT = None
    mock_settings.SCRIPT_EXTRA_MODULES = None
    script = "def execute(data, config):\n    while True:\n        pass\n"
    with pytest.raises(ScriptTimeoutError):
        RestrictedPythonRuntime().run(script, {}, {"timeout": 1})


class TestScriptContext:
    def test_to_dict(self) -> None:
        ctx = ScriptContext(data={"k": "v"}, config={"c": 1})
        d = ctx.to_dict()
        assert d["data"] == {"k": "v"}
        assert d["config"] == {"c": 1}
        assert d["result"] is None
        assert callable(d["log"].info)

    def test_script_log_goes_to_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.engines.script.user"):
            RestrictedPythonRuntime().run("log.info('hello %s', data['who'])", {"who": "x"})
        assert "hello x" in caplog.text


class _Raising:
    def run(self, code: str, data: dict[str, Any], config: dict[str, Any] | None = None) -> Any:
        raise RuntimeError("boom")


class TestRunScript:
    def test_success(self) -> None:
        script = ScriptReference(code="result = {'result': 42}")
        assert run_script(script, {}) == ScriptSuccess({"result": 42})

    def test_runtime_error_converted(self) -> None:
        res = run_script(ScriptReference(code="x"), {}, runtime=_Raising())
        assert res == ScriptFailure(kind="RuntimeError", message="boom")

    def test_syntax_error_converted(self) -> None:
        res = run_script(ScriptReference(code="def f(  "), {})
        assert isinstance(res, ScriptFailure)
        assert res.kind == "SyntaxError"

    def test_unknown_language_converted(self) -> None:
        res = run_script(ScriptReference(language="cobol", code="x"), {})
        assert isinstance(res, ScriptFailure)
        assert res.kind == "UnsupportedLanguageError"

    def test_get_runtime(self) -> None:
        assert isinstance(get_runtime("Python"), RestrictedPythonRuntime)
        with pytest.raises(UnsupportedLanguageError):
            get_runtime("lua")

    @pytest.mark.parametrize(
        ("code", "kind"),
        [("raise SystemExit(3)", "SystemExit"), ("raise KeyboardInterrupt", "KeyboardInterrupt")],
    )
    def test_base_exception_from_script_converted(self, code: str, kind: str) -> None:
        res = run_script(ScriptReference(code=code), {})
        assert isinstance(res, ScriptFailure)
        assert res.kind == kind
