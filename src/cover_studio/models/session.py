"""
Session state: phase, user inputs, and the append-only image history.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr

from cover_studio.errors import IndexOutOfRange
from cover_studio.models.artifact import Artifact


class Phase(str, Enum):
    IDLE = "idle"
    DESCRIBING = "describing"
    GENERATING = "generating"
    EDITING = "editing"
    READY = "ready"
    FAILED = "failed"

    @property
    def busy(self) -> bool:
        return self in BUSY_PHASES


BUSY_PHASES = frozenset({Phase.DESCRIBING, Phase.GENERATING, Phase.EDITING})


class HistoryStore(BaseModel):
    """Chronologically ordered artifacts plus a selection pointer.

    Artifacts are only ever appended. Restoring moves ``selected`` and never
    touches the sequence, so indices stay stable for the session's lifetime.
    """

    selected: Optional[int] = None

    _artifacts: list[Artifact] = PrivateAttr(default_factory=list)

    @property
    def artifacts(self) -> tuple[Artifact, ...]:
        return tuple(self._artifacts)

    def append(self, artifact: Artifact) -> int:
        self._artifacts.append(artifact)
        self.selected = len(self._artifacts) - 1
        return self.selected

    def restore(self, index: int) -> Artifact:
        if not 0 <= index < len(self._artifacts):
            raise IndexOutOfRange(index, len(self._artifacts))
        self.selected = index
        return self._artifacts[index]

    def current(self) -> Optional[Artifact]:
        if self.selected is None:
            return None
        return self._artifacts[self.selected]

    def newest_first(self) -> list[tuple[int, Artifact]]:
        """Display order for thumbnail strips: most recent first, original indices kept."""
        return list(reversed(list(enumerate(self._artifacts))))

    def __len__(self) -> int:
        return len(self._artifacts)


class Session(BaseModel):
    title: str = ""
    body: str = ""
    edit_input: str = ""
    phase: Phase = Phase.IDLE
    last_prompt: Optional[str] = None
    error_message: Optional[str] = None
    history: HistoryStore = Field(default_factory=HistoryStore)

    # Bumped on reset; in-flight requests compare against it before applying results.
    _epoch: int = PrivateAttr(default=0)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def has_input(self) -> bool:
        """True when a reset would discard something the user typed or produced."""
        return bool(self.title or self.body or len(self.history))

    def clear(self) -> None:
        self.title = ""
        self.body = ""
        self.edit_input = ""
        self.phase = Phase.IDLE
        self.last_prompt = None
        self.error_message = None
        self.history = HistoryStore()
        self._epoch += 1
