"""
Model Gateway: the three Gemini round trips behind cover generation.

  describe   blog title + body  -> short visual prompt   (text model)
  generate   prompt             -> 16:9 image artifact   (image model)
  edit       artifact + command -> 16:9 image artifact   (image model)

Each call is a single request with no retries; failures are normalized into
the cover_studio error taxonomy and propagate immediately.
"""

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from cover_studio.config import Settings, load_settings
from cover_studio.errors import (
    DescriptionFailed,
    NoContentGenerated,
    NoImageInResponse,
    TransportError,
)
from cover_studio.models.artifact import DEFAULT_MEDIA_TYPE, Artifact

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "An abstract digital art illustration representing the blog post's content."

DESCRIBE_TEMPLATE = """You are an expert art director and illustrator.
Read the following blog post title and content (if provided), and write a concise, vivid, and creative image generation prompt (under 50 words) that would generate a perfect 16:9 cover image for this post.
Focus on visual elements, mood, lighting, and style suitable for a wide landscape format.

Blog Title: "{title}"

Blog Content:
{body}"""


def build_describe_prompt(title: str, body: str, body_prefix_limit: int) -> str:
    return DESCRIBE_TEMPLATE.format(title=title, body=body[:body_prefix_limit])


def extract_artifact(response: Any) -> Artifact:
    """Return the first inline image of the first candidate, in part order."""
    candidates = getattr(response, "candidates", None)
    candidate = candidates[0] if candidates else None
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) if content else None
    if not parts:
        raise NoContentGenerated()

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is None or not inline.data:
            continue
        data = inline.data
        if isinstance(data, bytes):
            return Artifact.from_bytes(data, inline.mime_type)
        return Artifact(media_type=inline.mime_type or DEFAULT_MEDIA_TYPE, data=data)

    raise NoImageInResponse()


def _transport_error(e: Exception) -> TransportError:
    if isinstance(e, genai_errors.APIError):
        return TransportError(
            f"Gemini API error {e.code}: {e.message or e.status or e}",
            details={"code": e.code, "status": e.status},
        )
    return TransportError(f"{type(e).__name__}: {e}", details={"error_type": type(e).__name__})


class ModelGateway:
    def __init__(self, client: Optional[genai.Client] = None, settings: Optional[Settings] = None):
        self._settings = settings or load_settings()
        self._client = client or genai.Client(api_key=self._settings.require_api_key())

    @property
    def settings(self) -> Settings:
        return self._settings

    def _image_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(aspect_ratio=self._settings.aspect_ratio),
        )

    async def describe(self, title: str, body: str) -> str:
        """Turn a blog title/body into a short, visually concrete image prompt."""
        contents = build_describe_prompt(title, body, self._settings.body_prefix_limit)
        logger.debug("describe: model=%s body_chars=%d", self._settings.text_model, len(body))
        try:
            response = await self._client.aio.models.generate_content(
                model=self._settings.text_model,
                contents=contents,
            )
            text = response.text
        except Exception as e:
            logger.warning("describe failed: %s", e)
            raise DescriptionFailed(details={"error": str(e)}) from e

        if not text or not text.strip():
            logger.info("describe returned empty text, using fallback description")
            return FALLBACK_DESCRIPTION
        return text.strip()

    async def generate(self, prompt: str) -> Artifact:
        """Synthesize a cover image from a prompt."""
        logger.debug("generate: model=%s prompt=%r", self._settings.image_model, prompt[:80])
        response = await self._call_image_model(prompt)
        return extract_artifact(response)

    async def edit(self, base: Artifact, command: str) -> Artifact:
        """Apply a natural-language edit to an existing artifact."""
        logger.debug("edit: model=%s command=%r", self._settings.image_model, command)
        contents = [
            types.Part.from_text(text=command),
            types.Part.from_bytes(data=base64.b64decode(base.bare_payload), mime_type=base.media_type),
        ]
        response = await self._call_image_model(contents)
        return extract_artifact(response)

    async def _call_image_model(self, contents: Any) -> Any:
        try:
            return await self._client.aio.models.generate_content(
                model=self._settings.image_model,
                contents=contents,
                config=self._image_config(),
            )
        except Exception as e:
            logger.warning("image request failed: %s", e)
            raise _transport_error(e) from e
