"""
Pydantic models shared by the sanitizer, the script job and the API.

Form payloads are plain JSON values (str, int, float, bool, None, list, dict);
``JSONValue`` names that shape for type hints.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

JSONValue = Union[str, int, float, bool, None, list["JSONValue"], dict[str, "JSONValue"]]


# ---------------------------------------------------------------------------
# Screen definition (read-only input from form design tooling)
# ---------------------------------------------------------------------------


class ScreenPage(BaseModel):
    """One page of a screen. Items are raw dicts: leaves or containers with ``items``."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    items: list[Any] = Field(default_factory=list)


class ScreenDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    title: str | None = None
    pages: list[ScreenPage] = Field(default_factory=list)

    @classmethod
    def from_config(cls, config: list[dict[str, Any]], **kwargs: Any) -> "ScreenDefinition":
        """Build from a stored screen ``config`` (a bare list of pages)."""
        return cls(pages=config, **kwargs)


# ---------------------------------------------------------------------------
# Script execution
# ---------------------------------------------------------------------------


class ScriptReference(BaseModel):
    """
    An automation script. ``code`` may be replaced in memory for a preview run;
    use ``with_code`` so the stored definition is never touched.
    """

    id: int | str | None = None
    title: str | None = None
    language: str = "python"
    code: str = ""

    def with_code(self, code: str) -> "ScriptReference":
        return self.model_copy(update={"code": code})


class ExecutionRequest(BaseModel):
    """One job attempt: consumed once by ExecuteScript, never persisted."""

    script: ScriptReference
    user_id: str
    code: str
    data: dict[str, Any] = Field(default_factory=dict)
    watcher: str
    configuration: dict[str, Any] = Field(default_factory=dict)


class ExecutionOutcome(BaseModel):
    status: int
    response: dict[str, Any]

    @property
    def succeeded(self) -> bool:
        return self.status == 200


class ScriptResponseEvent(BaseModel):
    """Payload delivered to the invoking user's notification channel."""

    type: str = "script_response"
    status: int
    response: dict[str, Any]
    watcher: str


# ---------------------------------------------------------------------------
# API bodies
# ---------------------------------------------------------------------------


class TokenPayload(BaseModel):
    sub: str | None = None


class ScriptPreviewIn(BaseModel):
    """Body for POST /scripts/preview."""

    script: ScriptReference
    code: str
    data: dict[str, Any] = Field(default_factory=dict)
    config: dict[str, Any] = Field(default_factory=dict)
    watcher: str = Field(..., min_length=1, max_length=255)
    screen: ScreenDefinition | None = None


class ScriptPreviewOut(BaseModel):
    status: str = "queued"
    watcher: str


class SanitizeIn(BaseModel):
    """Body for POST /screens/sanitize."""

    data: dict[str, Any] = Field(default_factory=dict)
    screen: ScreenDefinition | None = None
