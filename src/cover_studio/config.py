"""
Settings for the Gemini-backed gateway.

Precedence, lowest first: built-in defaults, ~/.cover-studio/config.json,
environment variables (a local .env file is loaded first).
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from cover_studio.errors import ConfigError

CONFIG_FILE = Path.home() / ".cover-studio" / "config.json"

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_BODY_PREFIX_LIMIT = 5000

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


class Settings(BaseModel):
    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    body_prefix_limit: int = DEFAULT_BODY_PREFIX_LIMIT

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigError(
                "No Gemini API key configured. Set GEMINI_API_KEY or run `cover-studio config set-key`."
            )
        return self.api_key


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    path = path or CONFIG_FILE
    try:
        return json.loads(path.read_text())
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}")


def save_config(cfg: dict[str, Any], path: Optional[Path] = None) -> Path:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2))
    return path


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for var in API_KEY_ENV_VARS:
        if os.environ.get(var):
            overrides["api_key"] = os.environ[var]
            break
    if os.environ.get("COVER_STUDIO_TEXT_MODEL"):
        overrides["text_model"] = os.environ["COVER_STUDIO_TEXT_MODEL"]
    if os.environ.get("COVER_STUDIO_IMAGE_MODEL"):
        overrides["image_model"] = os.environ["COVER_STUDIO_IMAGE_MODEL"]
    return overrides


def load_settings(config_path: Optional[Path] = None, use_dotenv: bool = True) -> Settings:
    if use_dotenv:
        load_dotenv()
    cfg = load_config(config_path)
    known = {k: v for k, v in cfg.items() if k in Settings.model_fields}
    known.update(_env_overrides())
    return Settings(**known)
