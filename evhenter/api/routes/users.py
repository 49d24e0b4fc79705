"""Current user route."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from ..auth import Identity, require_identity

router = APIRouter(tags=["auth"])

@router.get("/auth/me")
def get_current_user(identity: Identity = Depends(require_identity)):
    """The authenticated caller."""
    return {"success": True, "data": asdict(identity)}
