"""
AsyncCoverStudio / CoverStudio: one session, one gateway, one orchestrator.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional, Union

from cover_studio.config import Settings, load_settings
from cover_studio.errors import ValidationError
from cover_studio.export import save_artifact
from cover_studio.gateway import ModelGateway
from cover_studio.models.artifact import Artifact
from cover_studio.models.session import Session
from cover_studio.orchestrator import Gateway, Orchestrator


class AsyncCoverStudio:
    """Async cover studio client (primary)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        gateway: Optional[Gateway] = None,
        on_change: Optional[Callable[[Session], None]] = None,
    ):
        if gateway is None:
            settings = settings or load_settings()
            if api_key:
                settings = settings.model_copy(update={"api_key": api_key})
            gateway = ModelGateway(settings=settings)
        self.gateway = gateway
        self.orchestrator = Orchestrator(gateway, on_change=on_change)
        self.session = Session()

    def set_input(self, title: Optional[str] = None, body: Optional[str] = None) -> None:
        if title is not None:
            self.session.title = title
        if body is not None:
            self.session.body = body

    async def produce(self) -> Session:
        return await self.orchestrator.produce(self.session)

    async def refine(self, command: Optional[str] = None) -> Session:
        return await self.orchestrator.refine(self.session, command)

    def restore(self, index: int) -> Artifact:
        self.orchestrator.restore(self.session, index)
        return self.session.history.current()  # type: ignore[return-value]

    def reset(self) -> Session:
        return self.orchestrator.reset(self.session)

    def current(self) -> Optional[Artifact]:
        return self.session.history.current()

    def save(self, directory: Union[str, Path] = ".", filename: Optional[str] = None) -> Path:
        artifact = self.current()
        if artifact is None:
            raise ValidationError("Nothing to save yet: generate an image first.")
        return save_artifact(artifact, directory, filename)


class CoverStudio:
    """Sync wrapper around AsyncCoverStudio. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncCoverStudio(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def session(self) -> Session:
        return self._async.session

    def set_input(self, title: Optional[str] = None, body: Optional[str] = None) -> None:
        self._async.set_input(title=title, body=body)

    def produce(self) -> Session:
        return self._run(self._async.produce())

    def refine(self, command: Optional[str] = None) -> Session:
        return self._run(self._async.refine(command))

    def restore(self, index: int) -> Artifact:
        return self._async.restore(index)

    def reset(self) -> Session:
        return self._async.reset()

    def current(self) -> Optional[Artifact]:
        return self._async.current()

    def save(self, directory: Union[str, Path] = ".", filename: Optional[str] = None) -> Path:
        return self._async.save(directory, filename)

    def close(self) -> None:
        self._loop.close()
