from supabase import Client
from app.modules.companies.schemas import SupplierResponse
from app.core.errors import to_http_exception
from typing import Any, Dict, List, Optional
from fastapi import HTTPException


def supplier_name_for(email: str, user_metadata: Optional[Dict[str, Any]] = None) -> str:
    """Display name the signup trigger gives a new supplier: full_name metadata, else the email."""
    full_name = (user_metadata or {}).get("full_name")
    if full_name and str(full_name).strip():
        return str(full_name)
    return email


class SupplierService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_suppliers(self) -> List[SupplierResponse]:
        """Suppliers visible to the caller (RLS limits this to their own record)"""
        try:
            result = self.supabase.table("suppliers")\
                .select("*")\
                .order("name")\
                .execute()

            return [SupplierResponse(**s) for s in result.data or []]
        except Exception as e:
            raise to_http_exception(e)

    def get_supplier_by_id(self, supplier_id: str) -> SupplierResponse:
        try:
            result = self.supabase.table("suppliers")\
                .select("*")\
                .eq("id", supplier_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Supplier record not found for this identity")

            return SupplierResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e)
