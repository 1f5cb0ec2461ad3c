# scan_proxy/routers/endpoints.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_settings
from ..errors import ConfigurationError
from ..models import EndpointBundle, ModelSelector, resolve
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["models"])


@router.get("/models", include_in_schema=False)
def list_models():
    return {"models": [m.value for m in ModelSelector]}


@router.get("/models/{model}/endpoints", response_model=EndpointBundle)
def model_endpoints(model: str, settings: Settings = Depends(get_settings)):
    # Show where retrain / add-image / bounding-box calls go for this model (no API keys)
    selector = ModelSelector.parse(model)
    try:
        return resolve(selector, settings)
    except ConfigurationError as e:
        logger.error("%s", e)
        raise HTTPException(500, "Endpoint configuration incomplete")
