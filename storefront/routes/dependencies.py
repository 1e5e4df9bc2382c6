"""Shared route dependencies"""

from typing import Optional

from fastapi import HTTPException

from ..core.config import settings
from ..core.session import session_manager, UserSession
from ..services.catalog_client import CatalogClient

# Initialize services (would be dependency injected in production)
catalog_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
    """Get or create catalog client"""
    global catalog_client
    if catalog_client is None:
        catalog_client = CatalogClient(
            base_url=settings.catalog_base_url,
            timeout=settings.request_timeout,
        )
    return catalog_client


def get_user_session(session_id: str) -> UserSession:
    """Resolve the session in the path or fail with 404"""
    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    session.touch()
    return session
