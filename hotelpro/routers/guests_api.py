from fastapi import APIRouter, Depends, Response

from ..deps import get_storage
from ..errors import NotFound
from ..schemas import GuestOut
from ..storage import Storage

router = APIRouter(prefix="/api/guests", tags=["guests"])

@router.get("/{guest_id}", response_model=GuestOut)
def api_guest(guest_id: int, storage: Storage = Depends(get_storage)):
    guest = storage.get_guest(guest_id)
    if not guest:
        raise NotFound("Guest not found")
    return guest

@router.delete("/{guest_id}", status_code=204)
def api_delete_guest(guest_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_guest(guest_id):
        raise NotFound("Guest not found")
    return Response(status_code=204)
