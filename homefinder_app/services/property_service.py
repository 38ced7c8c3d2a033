import logging
import uuid

from core.breaker import breaker
from core.check_permission import CheckRolePermission
from core.errors import Forbidden, NotFound, ValidationFailed
from models.enums import PropertyType
from repos.property_repo import PropertyRepo
from schemas.schema import PropertyOut

logger = logging.getLogger(__name__)

SEARCHABLE_TYPES = {t.value for t in PropertyType} | {"all"}


class PropertyService:
    def __init__(self, db):
        self.repo: PropertyRepo = PropertyRepo(db)
        self.permission: CheckRolePermission = CheckRolePermission()

    async def check_owner(self, property_id: uuid.UUID, user_id: uuid.UUID):
        prop = await self.repo.get_by_id(property_id)
        if not prop:
            raise NotFound("Property not found")

        if prop.owner_id != user_id:
            raise Forbidden("Forbidden: You do not own this property")
        return prop

    async def property_exists(self, property_id: uuid.UUID) -> bool:
        return await self.repo.exists(property_id)

    async def get_property_owner(self, property_id: uuid.UUID) -> uuid.UUID:
        owner_id = await self.repo.get_owner_id(property_id)
        if owner_id is None:
            raise NotFound("Property not found")
        return owner_id

    async def search(
        self,
        *,
        location: str | None = None,
        type: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
    ) -> list[PropertyOut]:
        async def handler():
            if type and type not in SEARCHABLE_TYPES:
                raise ValidationFailed("Type must be apartment, house, or kost")
            props = await self.repo.search(
                location=location,
                type=type,
                min_price=min_price,
                max_price=max_price,
            )
            return [PropertyOut.model_validate(row) for row in props]

        return await breaker.call(handler)

    async def get_one(self, property_id: uuid.UUID) -> PropertyOut:
        async def handler():
            prop = await self.repo.get_by_id(property_id)
            if not prop:
                raise NotFound("Property not found")
            return PropertyOut.model_validate(prop)

        return await breaker.call(handler)

    async def list_mine(self, current_user) -> list[PropertyOut]:
        async def handler():
            self.permission.check_owner(current_user)
            props = await self.repo.list_by_owner(current_user.user_id)
            return [PropertyOut.model_validate(row) for row in props]

        return await breaker.call(handler)

    async def create_property(self, current_user, data) -> PropertyOut:
        async def handler():
            self.permission.check_owner(current_user)
            prop = await self.repo.create(
                owner_id=current_user.user_id,
                name=data.name,
                description=data.description,
                price=data.price,
                location=data.location,
                type=data.type,
                image_url=data.image_url,
            )
            logger.info(f"Property {prop.id} created by {current_user.user_id}")
            return PropertyOut.model_validate(prop)

        return await breaker.call(handler)

    async def update_property(
        self, property_id: uuid.UUID, current_user, data
    ) -> PropertyOut:
        async def handler():
            self.permission.check_owner(current_user)
            update_data = data.model_dump(exclude_unset=True)
            if not update_data:
                raise ValidationFailed("No fields provided for update.")

            prop = await self.check_owner(property_id, current_user.user_id)
            prop = await self.repo.update(prop, **update_data)
            return PropertyOut.model_validate(prop)

        return await breaker.call(handler)

    async def delete_property(self, property_id: uuid.UUID, current_user) -> bool:
        async def handler():
            self.permission.check_owner(current_user)
            if await self.get_property_owner(property_id) != current_user.user_id:
                raise Forbidden("Forbidden: You do not own this property")
            deleted = await self.repo.delete_with_messages(
                property_id, current_user.user_id
            )
            if not deleted:
                raise NotFound("Property not found")
            logger.info(f"Property {property_id} and its messages deleted")
            return True

        return await breaker.call(handler)
