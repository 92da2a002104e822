# schoolhub/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Type, Any, Dict, Optional, TypeVar, Generic

from ..core.exceptions import NotFoundError

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    resource_name = "Resource"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any, include_deleted: bool = False) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        if not include_deleted:
            stmt = stmt.where(self.model.is_deleted == False)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if not obj:
            raise NotFoundError(self.resource_name)
        return obj

    async def get_multi(self, skip: int = 0, limit: int = 100, include_deleted: bool = False, **filters):
        stmt = select(self.model).offset(skip).limit(limit)

        if not include_deleted:
            stmt = stmt.where(self.model.is_deleted == False)

        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)

        result = await self.db.execute(stmt.order_by(self.model.created_at.desc()))
        return result.scalars().all()

    async def get_paginated(
        self,
        page: int = 1,
        size: int = 20,
        include_deleted: bool = False,
        order_by: str = None,
        sort: str = "asc",
        **filters
    ):
        """Get paginated results with optional soft delete filtering"""
        offset = (page - 1) * size

        stmt = select(self.model)
        count_stmt = select(func.count()).select_from(self.model)

        if not include_deleted:
            stmt = stmt.where(self.model.is_deleted == False)
            count_stmt = count_stmt.where(self.model.is_deleted == False)

        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)
                count_stmt = count_stmt.where(getattr(self.model, key) == value)

        total = (await self.db.execute(count_stmt)).scalar()

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            stmt = stmt.order_by(order_field.desc() if sort.lower() == "desc" else order_field.asc())
        else:
            stmt = stmt.order_by(self.model.created_at.desc())

        stmt = stmt.offset(offset).limit(size)
        result = await self.db.execute(stmt)
        items = result.scalars().all()

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "total_pages": (total + size - 1) // size,
            "has_next": page * size < total,
            "has_previous": page > 1,
        }

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: Any, obj_in: Dict) -> Optional[T]:
        obj = await self.get(id)
        if not obj:
            return None
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def soft_delete(self, id: Any) -> bool:
        obj = await self.get(id)
        if not obj:
            return False
        obj.is_deleted = True
        await self.db.commit()
        return True

    async def get_active_count(self, **filters) -> int:
        """Get count of non-deleted records"""
        stmt = select(func.count()).select_from(self.model).where(self.model.is_deleted == False)
        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)
        result = await self.db.execute(stmt)
        return result.scalar()
