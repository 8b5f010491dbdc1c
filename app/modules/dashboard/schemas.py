from pydantic import BaseModel
from typing import Optional


class DashboardResponse(BaseModel):
    title: str = "Welcome to SupplierCockpit"
    subtitle: str = "Quality Management System for External Suppliers"
    supplier_name: Optional[str] = None
    parameter_count: int = 0
    measurement_count: int = 0
    within_limits_count: int = 0
    outside_limits_count: int = 0
