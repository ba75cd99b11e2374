"""Health endpoints."""
import logging

from fastapi import APIRouter, Depends, Response

from ..dependencies import get_app_state
from ..schemas import HealthStatus
from ..state import AppState
from ..stores.catalog_store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(response: Response, app_state: AppState = Depends(get_app_state)) -> HealthStatus:
    """Return service heartbeat information."""

    refresh_state = app_state.refresh_cycle.state.value
    try:
        catalog_size = app_state.catalog_store.count()
    except StoreError as exc:
        logger.warning("catalog unavailable for health check: %s", exc)
        response.status_code = 503
        return HealthStatus(status="degraded", refresh_state=refresh_state, catalog_size=None)
    return HealthStatus(refresh_state=refresh_state, catalog_size=catalog_size)
