import logging
from datetime import date, datetime, time, timezone
from supabase import Client
from app.modules.measurements.schemas import (
    MeasurementCreate, MeasurementResponse, MeasurementListResponse, LimitStatus
)
from app.modules.control_plan.service import ControlPlanService
from app.core.errors import to_http_exception
from app.database.supabase_client import fetch_all_rows
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

MEASUREMENT_SELECT = (
    "id, supplier_id, parameter_id, value, measured_at, created_at, "
    "quality_parameters(name, unit, min_value, max_value), "
    "suppliers(name)"
)


def is_within_limits(value: float, min_value: Optional[float] = None, max_value: Optional[float] = None) -> bool:
    """Both limits are inclusive; a missing limit does not constrain."""
    if min_value is not None and value < min_value:
        return False
    if max_value is not None and value > max_value:
        return False
    return True


def limit_status(row: Dict[str, Any]) -> Optional[LimitStatus]:
    """within/outside for a measurement row joined with quality_parameters."""
    limits = row.get("quality_parameters")
    if limits is None:
        return None
    min_value = limits.get("min_value")
    max_value = limits.get("max_value")
    within = is_within_limits(
        float(row["value"]),
        float(min_value) if min_value is not None else None,
        float(max_value) if max_value is not None else None,
    )
    return LimitStatus.WITHIN if within else LimitStatus.OUTSIDE


def _to_response(row: Dict[str, Any]) -> MeasurementResponse:
    return MeasurementResponse(**row, status=limit_status(row))


class MeasurementService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_measurement(self, measurement_data: MeasurementCreate, supplier_id: str) -> MeasurementResponse:
        """Record a measurement for the acting supplier, stamped with the submission time"""
        try:
            result = self.supabase.table("measurements").insert({
                "parameter_id": measurement_data.parameter_id,
                "value": measurement_data.value,
                "measured_at": datetime.now(timezone.utc).isoformat(),
                "supplier_id": supplier_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to record measurement")

            logger.info("Supplier %s recorded measurement %s", supplier_id, result.data[0]["id"])
            return _to_response(result.data[0])
        except Exception as e:
            raise to_http_exception(e)

    def get_measurement(self, measurement_id: str) -> MeasurementResponse:
        try:
            result = self.supabase.table("measurements")\
                .select(MEASUREMENT_SELECT)\
                .eq("id", measurement_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Measurement not found")

            return _to_response(result.data[0])
        except Exception as e:
            raise to_http_exception(e)

    def list_measurements(
        self,
        supplier_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        parameter_id: Optional[str] = None,
        status: LimitStatus = LimitStatus.ALL,
    ) -> List[MeasurementResponse]:
        """Supplier's measurements, newest first. Date and parameter filters run in the query,
        the limit status filter runs on the fetched rows."""
        def build_query():
            query = self.supabase.table("measurements")\
                .select(MEASUREMENT_SELECT)\
                .eq("supplier_id", supplier_id)

            if start_date:
                query = query.gte("measured_at", datetime.combine(start_date, time.min).isoformat())
            if end_date:
                # Whole end day is included
                query = query.lte("measured_at", datetime.combine(end_date, time.max).isoformat())
            if parameter_id:
                query = query.eq("parameter_id", parameter_id)
            return query.order("measured_at", desc=True)

        try:
            rows = fetch_all_rows(build_query)

            measurements = [_to_response(row) for row in rows]
            if status != LimitStatus.ALL:
                measurements = [m for m in measurements if m.status == status]
            return measurements
        except Exception as e:
            raise to_http_exception(e)

    def list_measurements_with_parameters(self, supplier_id: str, **filters) -> MeasurementListResponse:
        """Parameter options for the filter bar plus the filtered measurements"""
        parameters = ControlPlanService(self.supabase).list_parameter_options()
        measurements = self.list_measurements(supplier_id, **filters)
        return MeasurementListResponse(parameters=parameters, measurements=measurements)

    def update_measurement_value(self, measurement_id: str, value: float) -> MeasurementResponse:
        """Change the value of one measurement; RLS hides rows of other suppliers"""
        try:
            result = self.supabase.table("measurements")\
                .update({"value": value})\
                .eq("id", measurement_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Measurement not found")

            logger.info("Updated measurement %s to %s", measurement_id, value)
        except Exception as e:
            raise to_http_exception(e)
        return self.get_measurement(measurement_id)

    def delete_measurement(self, measurement_id: str) -> bool:
        try:
            result = self.supabase.table("measurements")\
                .delete()\
                .eq("id", measurement_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Measurement not found")

            logger.info("Deleted measurement %s", measurement_id)
            return True
        except Exception as e:
            raise to_http_exception(e)
