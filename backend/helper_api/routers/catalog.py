"""Catalog endpoints exposing the currently popular media."""
from fastapi import APIRouter, Depends, HTTPException, Query

from backend.imdb.models import MediaType

from ..dependencies import get_catalog_store
from ..schemas import CatalogListModel, CatalogMetricsModel
from ..stores.catalog_store import CatalogStore, StoreError

router = APIRouter(
    prefix="/catalog",
    tags=["catalog"],
)


@router.get("", response_model=CatalogListModel)
def list_catalog(
    media_type: MediaType | None = Query(
        default=None,
        description="Filter results by media type (movie or tv).",
    ),
    store: CatalogStore = Depends(get_catalog_store),
) -> CatalogListModel:
    """Return the media currently considered popular."""

    try:
        items = store.list(media_type=media_type)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return CatalogListModel(items=items, total=len(items))


@router.get("/metrics", response_model=CatalogMetricsModel)
def catalog_metrics(store: CatalogStore = Depends(get_catalog_store)) -> CatalogMetricsModel:
    """Return aggregate catalog statistics."""

    try:
        return store.metrics()
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
