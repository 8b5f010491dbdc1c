import logging
from supabase import Client
from app.modules.control_plan.schemas import (
    QualityParameterCreate, QualityParameterUpdate, QualityParameterResponse, ParameterOption
)
from app.core.errors import to_http_exception
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ControlPlanService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_parameter(self, parameter_data: QualityParameterCreate) -> QualityParameterResponse:
        """Insert a quality parameter (no duplicate-name check)"""
        try:
            result = self.supabase.table("quality_parameters").insert({
                "name": parameter_data.name,
                "unit": parameter_data.unit,
                "min_value": parameter_data.min_value,
                "max_value": parameter_data.max_value,
                "description": parameter_data.description
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create quality parameter")

            logger.info("Created quality parameter %s (%s)", result.data[0]["id"], parameter_data.name)
            return QualityParameterResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e)

    def list_parameters(self) -> List[QualityParameterResponse]:
        try:
            result = self.supabase.table("quality_parameters")\
                .select("*")\
                .order("name")\
                .execute()

            return [QualityParameterResponse(**p) for p in result.data or []]
        except Exception as e:
            raise to_http_exception(e)

    def list_parameter_options(self) -> List[ParameterOption]:
        """id/name pairs for filter drop-downs"""
        try:
            result = self.supabase.table("quality_parameters")\
                .select("id, name")\
                .order("name")\
                .execute()

            return [ParameterOption(**p) for p in result.data or []]
        except Exception as e:
            raise to_http_exception(e)

    def get_parameter_by_id(self, parameter_id: str) -> QualityParameterResponse:
        try:
            result = self.supabase.table("quality_parameters")\
                .select("*")\
                .eq("id", parameter_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Quality parameter not found")

            return QualityParameterResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e)

    def update_parameter(self, parameter_id: str, parameter_data: QualityParameterUpdate) -> QualityParameterResponse:
        """Update a parameter in place. An explicit null limit clears it."""
        try:
            update_data = parameter_data.model_dump(exclude_unset=True)

            if not update_data:
                return self.get_parameter_by_id(parameter_id)

            result = self.supabase.table("quality_parameters")\
                .update(update_data)\
                .eq("id", parameter_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Quality parameter not found")

            logger.info("Updated quality parameter %s: %s", parameter_id, sorted(update_data))
            return QualityParameterResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e)
