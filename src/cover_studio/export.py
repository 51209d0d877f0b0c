"""
Download-to-disk for artifacts: a byte-for-byte write of the decoded payload.
"""

from pathlib import Path
from typing import Optional, Union

from cover_studio.models.artifact import Artifact

DEFAULT_STEM = "blog-visual-16x9"

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}


def default_filename(artifact: Artifact) -> str:
    ext = _EXTENSIONS.get(artifact.media_type.lower(), "png")
    return f"{DEFAULT_STEM}.{ext}"


def save_artifact(
    artifact: Artifact,
    directory: Union[str, Path] = ".",
    filename: Optional[str] = None,
) -> Path:
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / (filename or default_filename(artifact))
    path.write_bytes(artifact.to_bytes())
    return path
