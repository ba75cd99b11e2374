"""FastAPI dependencies for the media helper API."""
from fastapi import Depends, Request

from .services.query import QueryService
from .state import AppState
from .stores.catalog_store import CatalogStore


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_catalog_store(app_state: AppState = Depends(get_app_state)) -> CatalogStore:
    """Return the catalog store dependency."""
    return app_state.catalog_store


def get_query_service(app_state: AppState = Depends(get_app_state)) -> QueryService:
    """Compose the query service from the current search and store."""
    return QueryService(app_state.title_search, app_state.catalog_store)
