import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    """RFC5424 severity levels, serialized by name."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    ALERT = "ALERT"
    EMERGENCY = "EMERGENCY"


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


class ClientEvent(BaseModel):
    """What a client must send to queue an event."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    category: str = Field(..., examples=["authentication", "authorization"])
    hostname: str
    severity: Severity
    process: str
    summary: str
    tags: List[str] = Field(default_factory=list)
    details: Dict[str, Any]

    @field_validator("details")
    @classmethod
    def details_are_plain_json(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        # NaN / Infinity are not JSON and would be re-encoded as null
        if _has_non_finite(v):
            raise ValueError("details must not contain NaN or Infinity")
        return v


class OutboundEvent(BaseModel):
    """The event document handed to the log-aggregation platform."""

    model_config = ConfigDict(frozen=True)

    category: str
    hostname: str
    severity: Severity
    process: str
    summary: str
    tags: List[str]
    details: Dict[str, Any]
    source: str
    timestamp: datetime
    utctimestamp: datetime
