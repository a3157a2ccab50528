import threading
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_ENV: str = "dev"
    SERVICE_NAME: str = "event-proxy"

    # value of "source" on every forwarded event
    EVENT_SOURCE: str = "mozdef-proxy"

    QUEUE_BACKEND: Literal["sqs", "redis", "discard"] = "sqs"

    # SQS (credentials come from the boto3 default chain)
    QUEUE_URL: str = ""
    AWS_REGION: Optional[str] = None
    SQS_ENDPOINT_URL: Optional[str] = None

    # Redis list backend
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_QUEUE_KEY: str = "events:queue"

    # seconds; unset blocks until the queue handle is free
    QUEUE_LOCK_TIMEOUT: Optional[float] = Field(
        default=None, ge=0, le=threading.TIMEOUT_MAX, allow_inf_nan=False,
    )

    # empty disables the X-API-Key check
    INGEST_API_KEY: str = ""

    LOG_LEVEL: LogLevel = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


settings = Settings()
