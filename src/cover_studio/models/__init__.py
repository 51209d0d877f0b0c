from cover_studio.models.artifact import Artifact, DEFAULT_MEDIA_TYPE
from cover_studio.models.session import HistoryStore, Phase, Session

__all__ = ["Artifact", "DEFAULT_MEDIA_TYPE", "HistoryStore", "Phase", "Session"]
