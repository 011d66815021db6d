from fastapi import APIRouter, Depends

from ..deps import get_storage
from ..schemas import DashboardStatsOut
from ..services.dashboard import compute_dashboard_stats
from ..storage import Storage

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

@router.get("/stats/{hotel_id}", response_model=DashboardStatsOut)
def api_dashboard_stats(hotel_id: int, storage: Storage = Depends(get_storage)):
    return compute_dashboard_stats(storage, hotel_id)
