import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_storage
from ..schemas import StaffOut, StaffCreateIn
from ..storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/staff", tags=["staff"])

@router.get("/{hotel_id}", response_model=List[StaffOut])
def api_staff(hotel_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_staff_by_hotel(hotel_id)

@router.post("", response_model=StaffOut, status_code=201)
def api_create_staff(payload: StaffCreateIn, storage: Storage = Depends(get_storage)):
    member = storage.create_staff(
        hotel_id=payload.hotel_id,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        email=payload.email,
        phone=payload.phone,
        position=payload.position.value,
        department=payload.department,
        salary=Decimal(str(payload.salary)) if payload.salary is not None else None,
        hire_date=payload.hire_date,
        is_active=payload.is_active,
    )
    logger.info("Staff member %s added to hotel %s", member.id, member.hotel_id)
    return member
