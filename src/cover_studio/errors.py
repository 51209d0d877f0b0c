"""
Cover Studio error types.

Every error carries a stable ``code`` so a front end can branch on the kind
of failure without parsing messages.
"""

from typing import Any, Optional


class CoverStudioError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ValidationError(CoverStudioError):
    def __init__(self, message: str):
        super().__init__("validation_error", message)


class SessionBusyError(CoverStudioError):
    def __init__(self, message: str = "A request is already in progress for this session."):
        super().__init__("session_busy", message)


class DescriptionFailed(CoverStudioError):
    def __init__(self, message: str = "Failed to analyze the blog content.", details: Optional[dict[str, Any]] = None):
        super().__init__("description_failed", message, details)


class NoContentGenerated(CoverStudioError):
    def __init__(self, message: str = "The model returned no content."):
        super().__init__("no_content_generated", message)


class NoImageInResponse(CoverStudioError):
    def __init__(self, message: str = "No image data found in the model response."):
        super().__init__("no_image_in_response", message)


class TransportError(CoverStudioError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("transport_error", message, details)


class IndexOutOfRange(CoverStudioError):
    def __init__(self, index: int, length: int):
        super().__init__(
            "index_out_of_range",
            f"History index {index} out of range (0..{length - 1})" if length else f"History index {index} out of range (history is empty)",
            {"index": index, "length": length},
        )


class ConfigError(CoverStudioError):
    def __init__(self, message: str):
        super().__init__("config_error", message)
