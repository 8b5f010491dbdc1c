from supabase import Client
from app.database.supabase_client import fetch_all_rows
from app.modules.dashboard.schemas import DashboardResponse
from app.modules.measurements.service import limit_status
from app.modules.measurements.schemas import LimitStatus
from app.core.errors import to_http_exception


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_summary(self, supplier_id: str) -> DashboardResponse:
        """Welcome panel plus limit counts over the supplier's measurements"""
        try:
            supplier_result = self.supabase.table("suppliers")\
                .select("name")\
                .eq("id", supplier_id)\
                .limit(1)\
                .execute()

            # Total comes from the Content-Range count, not from the (capped) rows
            parameters_result = self.supabase.table("quality_parameters")\
                .select("id", count="exact")\
                .limit(1)\
                .execute()

            rows = fetch_all_rows(
                lambda: self.supabase.table("measurements")
                .select("id, value, quality_parameters(min_value, max_value)")
                .eq("supplier_id", supplier_id)
                .order("id")
            )
        except Exception as e:
            raise to_http_exception(e)

        statuses = [limit_status(row) for row in rows]
        return DashboardResponse(
            supplier_name=supplier_result.data[0]["name"] if supplier_result.data else None,
            parameter_count=parameters_result.count or 0,
            measurement_count=len(rows),
            within_limits_count=statuses.count(LimitStatus.WITHIN),
            outside_limits_count=statuses.count(LimitStatus.OUTSIDE),
        )
