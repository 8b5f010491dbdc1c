from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.parsing import parse_required_number
from app.modules.control_plan.schemas import ParameterOption


class LimitStatus(str, Enum):
    ALL = "all"
    WITHIN = "within"
    OUTSIDE = "outside"


class MeasurementCreate(BaseModel):
    parameter_id: str
    value: float

    @field_validator("parameter_id", mode="before")
    @classmethod
    def parameter_required(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Please select a quality parameter")
        return str(v).strip()

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v):
        return parse_required_number(v)


class MeasurementUpdate(BaseModel):
    value: float

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v):
        return parse_required_number(v)


class ParameterLimits(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None


class SupplierName(BaseModel):
    name: Optional[str] = None


class MeasurementResponse(BaseModel):
    id: str
    supplier_id: Optional[str] = None
    parameter_id: Optional[str] = None
    value: float
    measured_at: datetime
    created_at: Optional[datetime] = None
    quality_parameters: Optional[ParameterLimits] = None
    suppliers: Optional[SupplierName] = None
    status: Optional[LimitStatus] = None  # within/outside; None when limits were not loaded

    class Config:
        from_attributes = True


class MeasurementListResponse(BaseModel):
    parameters: List[ParameterOption]
    measurements: List[MeasurementResponse]
