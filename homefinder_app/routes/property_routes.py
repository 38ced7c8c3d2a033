import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.check_permission import require_owner
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from schemas.schema import (
    AuthTokenPayload,
    DetailOut,
    PropertyCreate,
    PropertyEnvelopeOut,
    PropertyListOut,
    PropertyUpdate,
)
from services.property_service import PropertyService

router = APIRouter(tags=["Property Management"])


@cbv(router=router)
class PropertyRoutes:
    @router.get("/properties", response_model=PropertyListOut)
    @safe_handler
    async def search(
        self,
        db: AsyncSession = Depends(get_db_async),
        location: Optional[str] = None,
        type: Optional[str] = None,
        min_price: Optional[int] = Query(None, alias="minPrice"),
        max_price: Optional[int] = Query(None, alias="maxPrice"),
    ):
        properties = await PropertyService(db).search(
            location=location, type=type, min_price=min_price, max_price=max_price
        )
        return {"properties": properties}

    @router.get("/properties/{property_id}", response_model=PropertyEnvelopeOut)
    @safe_handler
    async def get_one(
        self,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
    ):
        return {"property": await PropertyService(db).get_one(property_id)}

    @router.get("/my-properties", response_model=PropertyListOut)
    @safe_handler
    async def my_properties(
        self,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(require_owner),
    ):
        return {"properties": await PropertyService(db).list_mine(current_user)}

    @router.post("/properties", response_model=PropertyEnvelopeOut, status_code=201)
    @safe_handler
    async def create(
        self,
        data: PropertyCreate,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(require_owner),
    ):
        prop = await PropertyService(db).create_property(
            current_user=current_user, data=data
        )
        return {"message": "Property created successfully", "property": prop}

    @router.put("/properties/{property_id}", response_model=PropertyEnvelopeOut)
    @safe_handler
    async def update(
        self,
        property_id: uuid.UUID,
        data: PropertyUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(require_owner),
    ):
        prop = await PropertyService(db).update_property(
            property_id=property_id, current_user=current_user, data=data
        )
        return {"message": "Property updated successfully", "property": prop}

    @router.delete("/properties/{property_id}", response_model=DetailOut)
    @safe_handler
    async def delete_property(
        self,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: AuthTokenPayload = Depends(require_owner),
    ):
        await PropertyService(db).delete_property(
            property_id=property_id, current_user=current_user
        )
        return {"message": "Property deleted successfully"}
