import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from app.models.stock import Company

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "config.yaml"
DEFAULT_UPSTREAM_BASE_URL = "https://api.api-ninjas.com"
DEFAULT_API_KEY_HEADER = "X-Api-Key"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    config_path = path or os.getenv("CONFIG_PATH") or str(DEFAULT_CONFIG_PATH)
    try:
        with open(config_path, "r") as f:
            cfg = yaml.safe_load(f)
            if not cfg:
                raise ValueError("Config file is empty or invalid.")
            return cfg
    except FileNotFoundError:
        logging.error(f"❌ Config not found at {config_path}")
        raise SystemExit(f"Config not found: {config_path}")
    except yaml.YAMLError as e:
        logging.error(f"❌ Error parsing {config_path}: {e}")
        raise SystemExit(f"Error parsing config: {e}")
    except ValueError as e:
        logging.error(f"❌ Invalid config at {config_path}: {e}")
        raise SystemExit(f"Failed to load config: {e}")


load_dotenv()
config = load_config()


class Settings(BaseModel):
    """Read-only per-request configuration."""
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str]
    upstream_base_url: str
    api_key_header: str
    upstream_timeout: Optional[float]
    companies: Tuple[Company, ...]
    expose_error_details: bool


def build_settings(cfg: Dict[str, Any]) -> Settings:
    upstream_cfg = cfg.get("upstream") or {}
    timeout = upstream_cfg.get("timeout_seconds")
    return Settings(
        api_key=os.getenv("API_KEY") or None,
        upstream_base_url=os.getenv("UPSTREAM_BASE_URL")
        or upstream_cfg.get("base_url", DEFAULT_UPSTREAM_BASE_URL),
        api_key_header=upstream_cfg.get("api_key_header", DEFAULT_API_KEY_HEADER),
        upstream_timeout=float(timeout) if timeout is not None else None,
        companies=tuple(Company(**c) for c in cfg.get("companies") or []),
        expose_error_details=os.getenv("APP_ENV", "").lower() == "development",
    )


def get_settings() -> Settings:
    """FastAPI dependency; environment is re-read on every request."""
    return build_settings(config)
