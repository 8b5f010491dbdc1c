from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class SupplierResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
