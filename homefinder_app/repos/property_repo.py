import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from models.enums import PropertyType
from models.models import Message, Property


class PropertyRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, property_id: uuid.UUID) -> Optional[Property]:
        result = await self.db.execute(
            select(Property).where(Property.id == property_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, property_id: uuid.UUID) -> bool:
        result = await self.db.execute(
            select(Property.id).where(Property.id == property_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_owner_id(self, property_id: uuid.UUID) -> Optional[uuid.UUID]:
        result = await self.db.execute(
            select(Property.owner_id).where(Property.id == property_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: uuid.UUID) -> list[Property]:
        result = await self.db.execute(
            select(Property)
            .where(Property.owner_id == owner_id)
            .order_by(Property.created_at.desc())
        )
        return result.scalars().all()

    async def search(
        self,
        *,
        location: str | None = None,
        type: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
    ) -> list[Property]:
        conditions = []

        if location and location.strip():
            conditions.append(Property.location.contains(location, autoescape=True))

        if type and type != "all":
            conditions.append(Property.type == PropertyType(type))

        if min_price and min_price > 0:
            conditions.append(Property.price >= min_price)

        if max_price and max_price > 0:
            conditions.append(Property.price <= max_price)

        stmt = select(Property).where(*conditions).order_by(Property.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        description: str,
        price: int,
        location: str,
        type: PropertyType,
        image_url: str | None = None,
    ) -> Property:
        new_property = Property(
            owner_id=owner_id,
            name=name,
            description=description,
            price=price,
            location=location,
            type=type,
            image_url=image_url,
        )
        self.db.add(new_property)
        try:
            await self.db.commit()
            await self.db.refresh(new_property)
            return new_property
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def update(self, property_obj: Property, **fields) -> Property:
        for key, value in fields.items():
            setattr(property_obj, key, value)
        try:
            await self.db.commit()
            await self.db.refresh(property_obj)
            return property_obj
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def delete_with_messages(
        self, property_id: uuid.UUID, owner_id: uuid.UUID
    ) -> bool:
        try:
            await self.db.execute(
                delete(Message).where(Message.property_id == property_id)
            )
            result = await self.db.execute(
                delete(Property).where(
                    Property.id == property_id, Property.owner_id == owner_id
                )
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return False
            await self.db.commit()
            return True
        except SQLAlchemyError:
            await self.db.rollback()
            raise
