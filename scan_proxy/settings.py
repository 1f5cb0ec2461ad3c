# scan_proxy/settings.py
"""
Process-wide configuration, read once from the environment at startup.

Every variable is optional in the environment; unset and empty values both
become None. `Settings.validate()` rejects a configuration with missing
endpoints before the app serves anything.
"""
import logging
import os
from dataclasses import dataclass, field, fields
from typing import List, Mapping, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ICONS_BACKEND_URL = "http://localhost:3001/api/icons"
DEFAULT_DETECT_BACKEND_URL = "http://127.0.0.1:8000/yolo/detect"
DEFAULT_BACKEND_TIMEOUT = 30.0

# Superseded by BOUNDING_BOXES_RETINANET_ENDPOINT; never read into a bundle.
LEGACY_RETINANET_BBOX_KEY = "RETINANET_BOUNDING_BOXES_ENDPOINT"

ENV_KEYS = {
    "yolo_api_key": "YOLO_API_KEY",
    "yolo_endpoint": "YOLO_ENDPOINT",
    "yolo_bounding_boxes_endpoint": "BOUNDING_BOXES_ENDPOINT",
    "yolo_add_train_image": "YOLO_ADD_TRAIN_IMAGE",
    "yolo_retrain": "YOLO_RETRAIN",
    "retinanet_endpoint": "RETINANET_ENDPOINT",
    "retinanet_bounding_boxes_endpoint": "BOUNDING_BOXES_RETINANET_ENDPOINT",
    "retinanet_add_train_image": "RETINANET_ADD_TRAIN_IMAGE",
    "retinanet_retrain": "RETINANET_RETRAIN",
    "rlhf_base_endpoint": "RLHF_BASE_ENDPOINT",
    "icons_backend_url": "ICONS_BACKEND_URL",
    "detect_backend_url": "DETECT_BACKEND_URL",
    "backend_timeout": "BACKEND_TIMEOUT_SECONDS",
    "log_level": "LOG_LEVEL",
}

REQUIRED = (
    "yolo_retrain",
    "yolo_add_train_image",
    "yolo_bounding_boxes_endpoint",
    "retinanet_retrain",
    "retinanet_add_train_image",
    "retinanet_bounding_boxes_endpoint",
    "icons_backend_url",
    "detect_backend_url",
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    yolo_api_key: Optional[str] = None
    yolo_endpoint: Optional[str] = None
    yolo_bounding_boxes_endpoint: Optional[str] = None
    yolo_add_train_image: Optional[str] = None
    yolo_retrain: Optional[str] = None

    retinanet_endpoint: Optional[str] = None
    retinanet_bounding_boxes_endpoint: Optional[str] = None
    retinanet_add_train_image: Optional[str] = None
    retinanet_retrain: Optional[str] = None

    rlhf_base_endpoint: Optional[str] = None

    icons_backend_url: Optional[str] = DEFAULT_ICONS_BACKEND_URL
    detect_backend_url: Optional[str] = DEFAULT_DETECT_BACKEND_URL
    backend_timeout: float = DEFAULT_BACKEND_TIMEOUT
    log_level: str = "INFO"

    legacy_keys_set: tuple = field(default=(), repr=False, compare=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values = {}
        for name, key in ENV_KEYS.items():
            value = _clean(env.get(key))
            if value is not None:
                values[name] = value

        if "backend_timeout" in values:
            raw = values["backend_timeout"]
            try:
                timeout = float(raw)
            except ValueError:
                raise ConfigurationError(f"BACKEND_TIMEOUT_SECONDS must be a number, got {raw!r}")
            if timeout <= 0:
                raise ConfigurationError(f"BACKEND_TIMEOUT_SECONDS must be positive, got {raw!r}")
            values["backend_timeout"] = timeout

        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()

        if _clean(env.get(LEGACY_RETINANET_BBOX_KEY)) is not None:
            values["legacy_keys_set"] = (LEGACY_RETINANET_BBOX_KEY,)

        return cls(**values)

    def missing(self) -> List[str]:
        return [ENV_KEYS[name] for name in REQUIRED if getattr(self, name) is None]

    def validate(self) -> "Settings":
        missing = self.missing()
        if missing:
            raise ConfigurationError("Missing required configuration: " + ", ".join(missing))
        return self

    def warn_legacy_keys(self) -> None:
        for key in self.legacy_keys_set:
            logger.warning(
                "%s is set but ignored; RetinaNet bounding boxes use %s",
                key, ENV_KEYS["retinanet_bounding_boxes_endpoint"],
            )

    def redacted(self) -> dict:
        """Field values with API keys masked, for logging."""
        out = {}
        for f in fields(self):
            if not f.repr:
                continue
            value = getattr(self, f.name)
            if f.name.endswith("api_key") and value:
                value = "***"
            out[f.name] = value
        return out
