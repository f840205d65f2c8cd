"""Pytest config: PYTHONPATH and shared fakes for tests."""
import sys
from pathlib import Path
from typing import List, Optional

import pytest

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from mcp_servers.servers.weather.models import (  # noqa: E402
    ForecastReading,
    LogSeverity,
    SamplingOutcome,
)


class FakeFetcher:
    """Stands in for ForecastFetcher; returns a fixed reading."""

    def __init__(self, temperature: Optional[float] = None):
        self.temperature = temperature
        self.calls: List[tuple] = []

    def fetch(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        return ForecastReading(temperature_celsius=self.temperature)

    async def fetch_async(self, latitude, longitude):
        return self.fetch(latitude, longitude)


class RecordingNotifier:
    def __init__(self):
        self.progress: List[tuple] = []
        self.logs: List[tuple] = []

    async def emit_progress(self, token, completed, total, label):
        self.progress.append((token, completed, total, label))

    async def emit_log(self, severity: LogSeverity, message: str):
        self.logs.append((severity, message))

    def completed_values(self):
        return [p[1] for p in self.progress]

    def severities(self):
        return [s for s, _ in self.logs]


class FakeRequester:
    def __init__(self, outcome: SamplingOutcome):
        self.outcome = outcome
        self.calls: List[tuple] = []

    async def request_sample(self, system_prompt, user_message, model_hints, capability_available):
        self.calls.append((system_prompt, user_message, list(model_hints), capability_available))
        return self.outcome


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def make_requester():
    return FakeRequester
