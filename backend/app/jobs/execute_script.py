"""
ExecuteScript job: run a script preview and notify the invoking user.

Queued -> Running -> Success | Failure. Every attempt ends in exactly one
notification, tagged with the request's watcher token. Script errors never
escape ``handle``; notification transport errors do, so the queue can redeliver.

Delivery is at-least-once: a redelivered job runs the script again and sends
another notification. Scripts with external side effects must tolerate that.
"""

import logging
from typing import Any

from pydantic_core import to_jsonable_python

from app.engines.script import ScriptFailure, ScriptResult, ScriptRuntime, run_script
from app.models import ExecutionOutcome, ExecutionRequest
from app.notify import Notifier, get_notifier

logger = logging.getLogger(__name__)

STATUS_SUCCESS = 200
STATUS_FAILURE = 500


def package_result(result: ScriptResult) -> ExecutionOutcome:
    """Map a script result onto the status/response pair sent to the user."""
    if isinstance(result, ScriptFailure):
        return ExecutionOutcome(
            status=STATUS_FAILURE,
            response={"kind": result.kind, "message": result.message},
        )
    try:
        output: Any = to_jsonable_python(result.output, fallback=str)
    except ValueError as e:  # e.g. circular reference
        return package_result(ScriptFailure.from_exception(e))
    if not isinstance(output, dict):
        output = {"output": output}
    return ExecutionOutcome(status=STATUS_SUCCESS, response=output)


class ExecuteScript:
    def __init__(
        self,
        request: ExecutionRequest,
        *,
        runtime: ScriptRuntime | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.request = request
        self._runtime = runtime
        self._notifier = notifier

    def handle(self) -> ExecutionOutcome:
        req = self.request
        # Preview only: the stored script keeps its saved code.
        script = req.script.with_code(req.code)
        logger.info(
            "Running script %s for user %s (watcher=%s)", script.id, req.user_id, req.watcher
        )
        result = run_script(script, req.data, req.configuration, runtime=self._runtime)
        outcome = package_result(result)
        if not outcome.succeeded:
            logger.warning(
                "Script %s finished with status %s: %s",
                script.id,
                outcome.status,
                outcome.response.get("kind"),
            )
        self._send_response(outcome)
        return outcome

    def _send_response(self, outcome: ExecutionOutcome) -> None:
        notifier = self._notifier or get_notifier()
        notifier.notify(
            self.request.user_id, outcome.status, outcome.response, self.request.watcher
        )
