"""Shared stubs for unit tests."""

import asyncio
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from cover_studio import Artifact, Orchestrator, Session


class StubGateway:
    """In-memory gateway. Edited artifacts embed the base payload they were given."""

    def __init__(
        self,
        prompt: Optional[str] = "A neon city skyline at dusk, wide cinematic shot",
        describe_error: Optional[Exception] = None,
        generate_error: Optional[Exception] = None,
        edit_error: Optional[Exception] = None,
    ):
        self.prompt = prompt
        self.describe_error = describe_error
        self.generate_error = generate_error
        self.edit_error = edit_error
        self.calls: list[tuple[Any, ...]] = []
        self.edit_bases: list[Artifact] = []
        self.gate: Optional[asyncio.Event] = None
        self._generated = 0

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def describe(self, title: str, body: str) -> str:
        self.calls.append(("describe", title, body))
        await self._wait()
        if self.describe_error:
            raise self.describe_error
        return self.prompt

    async def generate(self, prompt: str) -> Artifact:
        self.calls.append(("generate", prompt))
        await self._wait()
        if self.generate_error:
            raise self.generate_error
        self._generated += 1
        return Artifact.from_bytes(f"generated-{self._generated}".encode())

    async def edit(self, base: Artifact, command: str) -> Artifact:
        self.calls.append(("edit", command))
        self.edit_bases.append(base)
        await self._wait()
        if self.edit_error:
            raise self.edit_error
        return Artifact.from_bytes(base.to_bytes() + b" + " + command.encode())


class FakeModels:
    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_content(self, *, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return self.response


class FakeGenaiClient:
    """Mimics the `client.aio.models` surface of google.genai.Client."""

    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.models = FakeModels(response, error)
        self.aio = SimpleNamespace(models=self.models)


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def orchestrator(gateway: StubGateway) -> Orchestrator:
    return Orchestrator(gateway)


@pytest.fixture
def session() -> Session:
    return Session(title="AI Trends 2025", body="")
