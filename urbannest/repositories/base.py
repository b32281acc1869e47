"""
Generic async repository shared by every table.
Writes commit immediately; conditional writes report whether a row matched.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, and_
from sqlalchemy.sql.elements import ColumnElement
from urbannest.database import Base
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD helpers bound to one model class and one session.
    Failed writes are rolled back, logged and re-raised.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a row and return it as stored.

        Args:
            obj_in: Column values for the new row

        Returns:
            The new instance, refreshed so server defaults are loaded
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Insert into {self.model_name} failed: {e}")
            raise

        logger.debug(f"Inserted {self.model_name} {db_obj.id}")
        return db_obj

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Load a row by primary key.

        Rows already in the session are overwritten with the stored values,
        so a read after a bulk UPDATE sees the new data.
        """
        query = (
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(f"Lookup of {self.model_name} {id} failed: {e}")
            raise
        return result.scalar_one_or_none()

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """Load the single row whose `field` equals `value`."""
        column = getattr(self.model, field, None)
        if column is None:
            raise ValueError(f"{self.model_name} has no column '{field}'")

        try:
            result = await self.db.execute(select(self.model).where(column == value))
        except Exception as e:
            logger.error(f"Lookup of {self.model_name} by {field} failed: {e}")
            raise
        return result.scalar_one_or_none()

    async def update_where(
        self,
        id: uuid.UUID,
        obj_in: Dict[str, Any],
        *conditions: ColumnElement[bool]
    ) -> Optional[ModelType]:
        """
        Update one row in a single statement guarded by extra conditions.

        Args:
            id: Primary key of the row
            obj_in: Columns to set
            conditions: Further WHERE clauses, e.g. an ownership check

        Returns:
            The updated row, or None when no row satisfied every condition
        """
        stmt = (
            update(self.model)
            .where(and_(self.model.id == id, *conditions))
            .values(**obj_in)
        )
        try:
            result = await self.db.execute(stmt)
            # Commit rather than roll back so instances loaded in this session stay live
            await self.db.commit()
            if result.rowcount == 0:
                return None
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Update of {self.model_name} {id} failed: {e}")
            raise

        logger.debug(f"Updated {self.model_name} {id}: {sorted(obj_in)}")
        return await self.get_by_id(id)

    async def delete_where(self, *conditions: ColumnElement[bool]) -> int:
        """
        Delete every row matching all conditions.

        Returns:
            Number of rows removed
        """
        try:
            result = await self.db.execute(delete(self.model).where(and_(*conditions)))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Delete from {self.model_name} failed: {e}")
            raise

        logger.debug(f"Deleted {result.rowcount} {self.model_name} rows")
        return result.rowcount

    async def count(self) -> int:
        """Number of rows in the table."""
        result = await self.db.execute(select(func.count(self.model.id)))
        return result.scalar()
