"""Session API routes"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.session import session_manager, UserSession
from ..services.catalog_client import CatalogClient
from .dependencies import get_catalog_client, get_user_session

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.post("", status_code=201)
async def create_session(client: CatalogClient = Depends(get_catalog_client)):
    """Start a session with an empty cart"""
    session = session_manager.create_session(client)
    return {"session_id": session.session_id}


@router.get("/{session_id}")
async def get_session(session: UserSession = Depends(get_user_session)):
    """Get session details"""
    return {
        "session_id": session.session_id,
        "created_at": session.created_at.isoformat(),
        "updated_at": session.updated_at.isoformat(),
        "checkout_state": session.checkout.state.value,
        "cart": {
            "items_count": session.store.item_count,
            "subtotal": session.store.display_subtotal,
        },
    }


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    """Delete a session"""
    if session_manager.delete_session(session_id):
        return {"message": "Session deleted"}
    raise HTTPException(status_code=404, detail="Session not found")
