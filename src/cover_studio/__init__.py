"""
cover-studio: 16:9 blog cover images from Gemini, with iterative edits.

Describe a post, generate a cover, refine it in plain language, and step back
through every variant produced along the way.
"""

from cover_studio.client import AsyncCoverStudio, CoverStudio
from cover_studio.config import Settings, load_settings
from cover_studio.errors import (
    ConfigError,
    CoverStudioError,
    DescriptionFailed,
    IndexOutOfRange,
    NoContentGenerated,
    NoImageInResponse,
    SessionBusyError,
    TransportError,
    ValidationError,
)
from cover_studio.export import save_artifact
from cover_studio.gateway import ModelGateway
from cover_studio.models import Artifact, HistoryStore, Phase, Session
from cover_studio.orchestrator import Orchestrator

__version__ = "0.1.0"
__all__ = [
    "AsyncCoverStudio",
    "CoverStudio",
    "Settings",
    "load_settings",
    "ModelGateway",
    "Orchestrator",
    "Artifact",
    "HistoryStore",
    "Phase",
    "Session",
    "save_artifact",
    "CoverStudioError",
    "ValidationError",
    "SessionBusyError",
    "DescriptionFailed",
    "NoContentGenerated",
    "NoImageInResponse",
    "TransportError",
    "IndexOutOfRange",
    "ConfigError",
]
