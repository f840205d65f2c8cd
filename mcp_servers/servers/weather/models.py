"""
Data model for the weather tool.

Every value that crosses a component boundary inside the server is one of
these pydantic models. They are frozen: an invocation never mutates the
objects it was given, it only builds new ones.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# MCP progress tokens are either strings or integers.
ProgressToken = Union[str, int]


class ToolInvocation(BaseModel):
    """One inbound `get_temperature` call."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    progress_token: Optional[ProgressToken] = None


class ForecastReading(BaseModel):
    """Result of one forecast lookup. `temperature_celsius` is None when the
    provider gave us nothing usable."""

    model_config = ConfigDict(frozen=True)

    temperature_celsius: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.temperature_celsius is not None

    @property
    def temperature_text(self) -> str:
        if self.temperature_celsius is None:
            return "unknown"
        return str(self.temperature_celsius)


class ProgressEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: Optional[ProgressToken] = None
    completed: float = Field(ge=0.0, le=1.0)
    total: float = 1.0
    label: str


class LogSeverity(str, Enum):
    """Severities the tool emits, valued as MCP logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: LogSeverity
    message: str


class SamplingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_prompt: str
    user_message: str
    model_hints: List[str] = Field(default_factory=list)


class SamplingOutcome(BaseModel):
    """
    Result of asking the peer for a completion.

    Either `text` is set (ok=True) or `error` describes why there is no
    usable text. The orchestrator picks the fallback phrase on failure.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "SamplingOutcome":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, error: str) -> "SamplingOutcome":
        return cls(ok=False, error=error)


class ToolResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
