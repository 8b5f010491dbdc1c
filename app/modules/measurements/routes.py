from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import get_current_user_id, get_user_supabase
from app.modules.control_plan.schemas import QualityParameterResponse
from app.modules.control_plan.service import ControlPlanService
from app.modules.measurements.schemas import (
    MeasurementCreate, MeasurementUpdate, MeasurementResponse, MeasurementListResponse, LimitStatus
)
from app.modules.measurements.service import MeasurementService
from supabase import Client
from typing import List, Optional, Dict
from datetime import date

router = APIRouter(prefix="/measurements", tags=["measurements"])


def get_measurement_service(supabase: Client = Depends(get_user_supabase)) -> MeasurementService:
    return MeasurementService(supabase)


@router.post("", response_model=MeasurementResponse, status_code=201)
async def record_measurement(
    measurement_data: MeasurementCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MeasurementService = Depends(get_measurement_service)
):
    """Record a measurement for the current supplier"""
    return service.create_measurement(measurement_data, user_data["id"])


@router.get("", response_model=MeasurementListResponse)
async def list_measurements(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    parameter_id: Optional[str] = None,
    status: LimitStatus = LimitStatus.ALL,
    user_data: Dict = Depends(get_current_user_id),
    service: MeasurementService = Depends(get_measurement_service)
):
    """Measurement history of the current supplier with date, parameter and limit-status filters"""
    return service.list_measurements_with_parameters(
        user_data["id"],
        start_date=start_date,
        end_date=end_date,
        parameter_id=parameter_id or None,
        status=status,
    )


@router.get("/parameters", response_model=List[QualityParameterResponse])
async def list_selectable_parameters(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase)
):
    """Parameters a measurement can be recorded against"""
    return ControlPlanService(supabase).list_parameters()


@router.get("/{measurement_id}", response_model=MeasurementResponse)
async def get_measurement(
    measurement_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MeasurementService = Depends(get_measurement_service)
):
    return service.get_measurement(measurement_id)


@router.put("/{measurement_id}", response_model=MeasurementResponse)
async def update_measurement(
    measurement_id: str,
    measurement_data: MeasurementUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: MeasurementService = Depends(get_measurement_service)
):
    """Edit the value of a measurement in place"""
    return service.update_measurement_value(measurement_id, measurement_data.value)


@router.delete("/{measurement_id}", status_code=204)
async def delete_measurement(
    measurement_id: str,
    confirm: bool = False,
    user_data: Dict = Depends(get_current_user_id),
    service: MeasurementService = Depends(get_measurement_service)
):
    """Delete a measurement. The first request only asks for confirmation; repeat it with confirm=true."""
    if not confirm:
        raise HTTPException(
            status_code=409,
            detail="Deletion not confirmed. Repeat the request with confirm=true to delete this measurement"
        )
    service.delete_measurement(measurement_id)
    return None
