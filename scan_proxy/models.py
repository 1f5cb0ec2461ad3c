# scan_proxy/models.py
from enum import Enum

from pydantic import BaseModel

from .errors import ConfigurationError, UnsupportedModel
from .settings import ENV_KEYS, Settings


class ModelSelector(str, Enum):
    YOLO = "YOLO"
    RETINANET = "RETINANET"

    @classmethod
    def parse(cls, value) -> "ModelSelector":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise UnsupportedModel(value)


class EndpointBundle(BaseModel):
    retrain_endpoint: str
    add_image_endpoint: str
    bounding_boxes_endpoint: str


# settings attribute names per bundle field; RetinaNet's bounding boxes key
# is BOUNDING_BOXES_RETINANET_ENDPOINT, not the RETINANET_-prefixed one.
_BUNDLE_FIELDS = {
    ModelSelector.YOLO: {
        "retrain_endpoint": "yolo_retrain",
        "add_image_endpoint": "yolo_add_train_image",
        "bounding_boxes_endpoint": "yolo_bounding_boxes_endpoint",
    },
    ModelSelector.RETINANET: {
        "retrain_endpoint": "retinanet_retrain",
        "add_image_endpoint": "retinanet_add_train_image",
        "bounding_boxes_endpoint": "retinanet_bounding_boxes_endpoint",
    },
}


def resolve(selector, settings: Settings) -> EndpointBundle:
    """
    Map a model selector to the retrain / add-image / bounding-boxes URLs
    configured for that model family.

    Raises UnsupportedModel for anything that is not a ModelSelector
    (strings from untyped input go through ModelSelector.parse first), and
    ConfigurationError when one of the three URLs is not configured.
    """
    if selector is ModelSelector.YOLO or selector is ModelSelector.RETINANET:
        mapping = _BUNDLE_FIELDS[selector]
    else:
        raise UnsupportedModel(selector)

    values = {}
    missing = []
    for field, attr in mapping.items():
        value = getattr(settings, attr)
        if value is None:
            missing.append(ENV_KEYS[attr])
        values[field] = value
    if missing:
        raise ConfigurationError(
            f"{selector.value} endpoints not configured: " + ", ".join(missing)
        )
    return EndpointBundle(**values)
