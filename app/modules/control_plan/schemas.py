from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from app.core.parsing import parse_number, require_text


class QualityParameterCreate(BaseModel):
    name: str
    unit: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v):
        return require_text(v, "Parameter name")

    @field_validator("unit", mode="before")
    @classmethod
    def unit_required(cls, v):
        return require_text(v, "Unit")

    @field_validator("min_value", "max_value", mode="before")
    @classmethod
    def parse_limit(cls, v):
        # Blank limit means "no limit"
        return parse_number(v)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v):
        if v is None or not str(v).strip():
            return None
        return v


class QualityParameterUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v):
        return require_text(v, "Parameter name")

    @field_validator("unit", mode="before")
    @classmethod
    def unit_not_blank(cls, v):
        return require_text(v, "Unit")

    @field_validator("min_value", "max_value", mode="before")
    @classmethod
    def parse_limit(cls, v):
        return parse_number(v)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v):
        if v is None or not str(v).strip():
            return None
        return v


class QualityParameterResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    unit: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ParameterOption(BaseModel):
    id: str
    name: str
