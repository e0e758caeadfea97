import json
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, str):
        return json.loads(v)
    elif isinstance(v, list):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./backend/)
        env_file="../.env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "formflow"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changethis"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: str | None = None

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Redis (notification channel)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str | None = None
    REDIS_ENABLED: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def redis_url(self) -> str:
        auth = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Job queue
    CELERY_BROKER_URL: str = "memory://"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def celery_eager(self) -> bool:
        """Jobs run inline in the submitting process (no remote worker)."""
        return self.CELERY_BROKER_URL == "memory://" or self.CELERY_TASK_ALWAYS_EAGER

    # Script engine
    SCRIPT_EXEC_TIMEOUT: int | None = None
    SCRIPT_EXTRA_MODULES: str | None = None

    NOTIFICATION_CHANNEL_PREFIX: str = "notifications.user"


settings = Settings()  # type: ignore
