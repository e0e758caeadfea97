"""
Engines: Script (Python, RestrictedPython).
"""

from app.engines.script import RestrictedPythonRuntime, get_runtime, run_script

__all__ = [
    "RestrictedPythonRuntime",
    "get_runtime",
    "run_script",
]
