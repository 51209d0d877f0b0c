"""
Orchestrator: the session state machine.

    idle ─produce─> describing ─> generating ─> ready
    ready ─refine─> editing ─> ready
    any in-flight phase ─error─> failed   (failed accepts a fresh produce/refine)

At most one request is in flight per session; produce/refine/restore raise
SessionBusyError while the phase is describing, generating or editing.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from cover_studio.errors import CoverStudioError, SessionBusyError, ValidationError
from cover_studio.models.artifact import Artifact
from cover_studio.models.session import Phase, Session

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
CANCELLED_MESSAGE = "The request was cancelled."


class Gateway(Protocol):
    async def describe(self, title: str, body: str) -> str: ...

    async def generate(self, prompt: str) -> Artifact: ...

    async def edit(self, base: Artifact, command: str) -> Artifact: ...


class _Superseded(Exception):
    """The session was reset while a request was in flight."""


class Orchestrator:
    def __init__(self, gateway: Gateway, on_change: Optional[Callable[[Session], None]] = None):
        self._gateway = gateway
        self._on_change = on_change

    def _transition(self, session: Session, phase: Phase, error_message: Optional[str] = None) -> None:
        session.phase = phase
        session.error_message = error_message
        logger.debug("session phase -> %s", phase.value)
        self._notify(session)

    def _notify(self, session: Session) -> None:
        if not self._on_change:
            return
        try:
            self._on_change(session)
        except Exception:
            # Observer errors never leave the session stuck in a busy phase.
            logger.exception("on_change hook failed (phase=%s)", session.phase.value)

    @staticmethod
    def _ensure_idle(session: Session) -> None:
        if session.phase.busy:
            raise SessionBusyError()

    @staticmethod
    def _check_epoch(session: Session, epoch: int) -> None:
        if session.epoch != epoch:
            raise _Superseded()

    def _fail(self, session: Session, error: Exception) -> None:
        if isinstance(error, CoverStudioError):
            logger.warning("request failed [%s]: %s", error.code, error.message)
            message = error.message
        else:
            logger.exception("unexpected error during request", exc_info=error)
            message = f"{UNEXPECTED_ERROR_MESSAGE} ({error})"
        self._transition(session, Phase.FAILED, message)

    async def produce(self, session: Session) -> Session:
        """Describe the blog post, then generate a cover image from the description."""
        self._ensure_idle(session)
        if not session.title.strip() and not session.body.strip():
            raise ValidationError("Enter a blog title or body first.")

        epoch = session.epoch
        self._transition(session, Phase.DESCRIBING)
        try:
            prompt = await self._gateway.describe(session.title, session.body)
            self._check_epoch(session, epoch)
            session.last_prompt = prompt
            self._transition(session, Phase.GENERATING)

            artifact = await self._gateway.generate(prompt)
            self._check_epoch(session, epoch)
        except _Superseded:
            logger.info("produce result discarded: session was reset")
            return session
        except asyncio.CancelledError:
            if session.epoch == epoch:
                logger.warning("produce cancelled")
                self._transition(session, Phase.FAILED, CANCELLED_MESSAGE)
            raise
        except Exception as e:
            if session.epoch != epoch:
                logger.info("produce failure discarded: session was reset")
                return session
            self._fail(session, e)
            return session

        index = session.history.append(artifact)
        logger.info("produced artifact #%d", index)
        self._transition(session, Phase.READY)
        return session

    async def refine(self, session: Session, command: Optional[str] = None) -> Session:
        """Edit the selected artifact with a natural-language command."""
        self._ensure_idle(session)
        command = session.edit_input if command is None else command
        base = session.history.current()
        if base is None:
            raise ValidationError("Generate an image before editing it.")
        if not command.strip():
            raise ValidationError("Enter an edit command.")

        epoch = session.epoch
        base_index = session.history.selected
        self._transition(session, Phase.EDITING)
        try:
            artifact = await self._gateway.edit(base, command)
            self._check_epoch(session, epoch)
        except _Superseded:
            logger.info("refine result discarded: session was reset")
            return session
        except asyncio.CancelledError:
            if session.epoch == epoch:
                logger.warning("refine cancelled")
                self._transition(session, Phase.FAILED, CANCELLED_MESSAGE)
            raise
        except Exception as e:
            if session.epoch != epoch:
                logger.info("refine failure discarded: session was reset")
                return session
            self._fail(session, e)
            return session

        index = session.history.append(artifact)
        logger.info("refined artifact #%d -> #%d", base_index, index)
        session.edit_input = ""
        self._transition(session, Phase.READY)
        return session

    def restore(self, session: Session, index: int) -> Session:
        """Move the selection to a previously produced artifact."""
        self._ensure_idle(session)
        session.history.restore(index)
        logger.debug("restored artifact #%d", index)
        return session

    def reset(self, session: Session) -> Session:
        """Return the session to its initial empty state, whatever the phase."""
        session.clear()
        logger.info("session reset")
        self._notify(session)
        return session
