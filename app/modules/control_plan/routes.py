from fastapi import APIRouter, Depends
from app.modules.control_plan.schemas import (
    QualityParameterCreate, QualityParameterUpdate, QualityParameterResponse
)
from app.modules.control_plan.service import ControlPlanService
from app.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/control-plan", tags=["control-plan"])


def get_control_plan_service(supabase: Client = Depends(get_user_supabase)) -> ControlPlanService:
    return ControlPlanService(supabase)


@router.post("", response_model=QualityParameterResponse, status_code=201)
async def create_parameter(
    parameter_data: QualityParameterCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ControlPlanService = Depends(get_control_plan_service)
):
    """Create a quality parameter"""
    return service.create_parameter(parameter_data)


@router.get("", response_model=List[QualityParameterResponse])
async def list_parameters(
    user_data: Dict = Depends(get_current_user_id),
    service: ControlPlanService = Depends(get_control_plan_service)
):
    """List the control plan"""
    return service.list_parameters()


@router.get("/{parameter_id}", response_model=QualityParameterResponse)
async def get_parameter(
    parameter_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ControlPlanService = Depends(get_control_plan_service)
):
    return service.get_parameter_by_id(parameter_id)


@router.put("/{parameter_id}", response_model=QualityParameterResponse)
async def update_parameter(
    parameter_id: str,
    parameter_data: QualityParameterUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ControlPlanService = Depends(get_control_plan_service)
):
    """Update a quality parameter in place"""
    return service.update_parameter(parameter_id, parameter_data)
