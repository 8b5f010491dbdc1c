from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user_id, get_user_supabase
from app.modules.dashboard.schemas import DashboardResponse
from app.modules.dashboard.service import DashboardService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase)
):
    return DashboardService(supabase).get_summary(user_data["id"])
