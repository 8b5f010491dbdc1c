from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user_id, get_user_supabase
from app.modules.companies.schemas import SupplierResponse
from app.modules.companies.service import SupplierService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/companies", tags=["companies"])


def get_supplier_service(supabase: Client = Depends(get_user_supabase)) -> SupplierService:
    return SupplierService(supabase)


@router.get("", response_model=List[SupplierResponse])
async def list_companies(
    user_data: Dict = Depends(get_current_user_id),
    service: SupplierService = Depends(get_supplier_service)
):
    """Supplier companies visible to the current identity"""
    return service.list_suppliers()


@router.get("/me", response_model=SupplierResponse)
async def get_own_company(
    user_data: Dict = Depends(get_current_user_id),
    service: SupplierService = Depends(get_supplier_service)
):
    """Supplier record linked to the current identity"""
    return service.get_supplier_by_id(user_data["id"])
