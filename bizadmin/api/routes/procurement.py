from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from bizadmin.core.deps import get_data_service
from bizadmin.schemas.common import MessageResponse
from bizadmin.schemas.procurement import PurchaseOrderCreate, PurchaseOrderRead
from bizadmin.services.data_service import KEY_COLUMN, DataService
from bizadmin.services.entities import PURCHASE_EDITOR
from bizadmin.services.search import filter_rows

router = APIRouter(prefix="/purchase-orders", tags=["Procurement"])


async def _get_or_404(service: DataService, code: int) -> PurchaseOrderRead:
    row = await service.select_by_key(PURCHASE_EDITOR.table, KEY_COLUMN, code)
    if not row:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return PurchaseOrderRead.model_validate(row)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[PurchaseOrderRead],
    summary="List purchase orders",
    description="Return all purchase orders in key order, optionally filtered by a substring of ref or contact.",
)
async def list_purchase_orders(
    service: DataService = Depends(get_data_service),
    search: Optional[str] = Query(None, description="Substring to match in ref or contact"),
) -> List[PurchaseOrderRead]:
    rows = await service.select_all(PURCHASE_EDITOR.table)
    rows = filter_rows(rows, PURCHASE_EDITOR.searchable, (search or "").lower())
    return [PurchaseOrderRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/{code}",
    response_model=PurchaseOrderRead,
    summary="Get purchase order",
)
async def get_purchase_order(
    code: int = Path(..., description="Purchase order code"),
    service: DataService = Depends(get_data_service),
) -> PurchaseOrderRead:
    return await _get_or_404(service, code)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=PurchaseOrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create purchase order",
    description="Insert a purchase order; the code is assigned by the backend.",
)
async def create_purchase_order(
    payload: PurchaseOrderCreate,
    service: DataService = Depends(get_data_service),
) -> PurchaseOrderRead:
    created = await service.insert(PURCHASE_EDITOR.table, payload.model_dump())
    return PurchaseOrderRead.model_validate(created)


# PUBLIC_INTERFACE
@router.put(
    "/{code}",
    response_model=PurchaseOrderRead,
    summary="Replace purchase order",
    description="Write every field of the payload to the purchase order with the given code.",
)
async def replace_purchase_order(
    payload: PurchaseOrderCreate,
    code: int = Path(..., description="Purchase order code"),
    service: DataService = Depends(get_data_service),
) -> PurchaseOrderRead:
    updated = await service.update(PURCHASE_EDITOR.table, payload.model_dump(), KEY_COLUMN, code)
    if updated is None:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return PurchaseOrderRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{code}",
    response_model=MessageResponse,
    summary="Delete purchase order",
)
async def delete_purchase_order(
    code: int = Path(..., description="Purchase order code"),
    service: DataService = Depends(get_data_service),
) -> MessageResponse:
    await service.delete(PURCHASE_EDITOR.table, KEY_COLUMN, code)
    return MessageResponse(message="Purchase order deleted", details={"code": code})
