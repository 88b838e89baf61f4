# kurstakip/routers/stats.py
from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.models.user import User
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_institution
from kurstakip.utils.reports import dashboard

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/dashboard")
def get_dashboard(
    ws: Workspace = Depends(get_workspace),
    user: User = Depends(require_institution),
):
    """
    Summary for the caller's institution:
    - student, course and active enrollment counts
    - enrollments ending soon
    - attendance rate per course
    - financial figures (admins only)
    """
    return dashboard(ws, include_financial=user.role == "admin")
