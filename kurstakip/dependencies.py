from typing import Iterator

from fastapi import Depends

from kurstakip.database import SessionLocal
from kurstakip.models.user import User
from kurstakip.stores.feed import ChangeFeed
from kurstakip.stores.gateway import DocumentGateway
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_institution

# one feed per process so every open store hears about every write
feed = ChangeFeed()
gateway = DocumentGateway(SessionLocal, feed)


def get_gateway() -> DocumentGateway:
    return gateway


def get_workspace(
    user: User = Depends(require_institution),
    gw: DocumentGateway = Depends(get_gateway),
) -> Iterator[Workspace]:
    """The caller's institution stores, live for the length of one request."""
    workspace = Workspace(gw, user.institution_id, user.id)
    try:
        yield workspace
    finally:
        workspace.close()
