from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_admin
from kurstakip.utils.seed import seed_demo_data

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.post("/seed")
def seed(ws: Workspace = Depends(get_workspace)):
    """Fills an empty institution with the course catalogue and demo students."""
    return {"success": True, "created": seed_demo_data(ws)}
