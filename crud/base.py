# crud/base.py — shared find/create/update/delete over one table
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import load_only

from database import Database
from models import new_id


class Repository:
    """
    One collection of records backed by one ORM model.

    Subclasses declare the ORM model, the record schema(s) and a mapping of
    record field name to ORM column. Reads return pydantic records, never rows.
    """

    name: str = "record"
    model: Type[Any]
    record: Type[BaseModel]
    populated_record: Optional[Type[BaseModel]] = None
    columns: Dict[str, Any] = {}
    default_sort: Sequence[str] = ()

    def __init__(self, db: Database):
        self.db = db

    @property
    def fields(self) -> List[str]:
        return [f for f in self.record.model_fields if f != "id"]

    # --- hooks -----------------------------------------------------------

    def _options(self, populate: bool) -> list:
        return []

    def _clause(self, field: str, value: Any):
        if field == "id":
            if isinstance(value, (list, tuple, set)):
                return self.model.id.in_(list(value))
            return self.model.id == value
        return self.columns[field] == value

    def _value(self, row, field: str, populate: bool) -> Any:
        return getattr(row, self.columns[field].key)

    async def _assign(self, session, row, record: BaseModel):
        for field in self.fields:
            value = getattr(record, field)
            if isinstance(value, Enum):
                value = value.value
            setattr(row, self.columns[field].key, value)

    # --- helpers ---------------------------------------------------------

    def _order(self, sort: Sequence[str]):
        for name in sort:
            column = self.columns[name.lstrip("-")]
            yield column.desc() if name.startswith("-") else column.asc()

    def _where(self, stmt, filter: Optional[Mapping[str, Any]]):
        for field, value in (filter or {}).items():
            stmt = stmt.where(self._clause(field, value))
        return stmt

    def _to_record(self, row, populate: bool = False, fields: Optional[Sequence[str]] = None):
        schema = self.populated_record if populate and self.populated_record else self.record
        data = {"id": row.id}
        for field in fields or self.fields:
            data[field] = self._value(row, field, populate)
        if fields:
            # projected records only carry the requested fields
            return schema.model_construct(**data)
        return schema.model_validate(data)

    # --- store contract --------------------------------------------------

    async def find_all(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        sort: Optional[Sequence[str]] = None,
        fields: Optional[Sequence[str]] = None,
        populate: bool = False,
    ) -> list:
        stmt = select(self.model).options(*self._options(populate))
        if fields:
            stmt = stmt.options(load_only(*(self.columns[f] for f in fields if f in self.columns)))
        stmt = self._where(stmt, filter)
        stmt = stmt.order_by(*self._order(sort if sort is not None else self.default_sort))

        async with self.db.session() as session:
            rows = (await session.execute(stmt)).scalars().all()
        return [self._to_record(row, populate, fields) for row in rows]

    async def find_one(self, filter: Mapping[str, Any], populate: bool = False):
        stmt = self._where(select(self.model).options(*self._options(populate)), filter).limit(1)
        async with self.db.session() as session:
            row = (await session.execute(stmt)).scalars().first()
        return None if row is None else self._to_record(row, populate)

    async def find_by_id(self, id: str, populate: bool = False):
        """Returns the record or None when nothing has that identity."""
        async with self.db.session() as session:
            row = await session.get(self.model, id, options=self._options(populate))
        if row is None:
            logger.debug("No {} with id {}", self.name, id)
            return None
        return self._to_record(row, populate)

    async def count_all(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filter)
        async with self.db.session() as session:
            return (await session.execute(stmt)).scalar_one()

    async def create(self, record: BaseModel):
        async with self.db.session() as session:
            row = self.model(id=new_id())
            await self._assign(session, row, record)
            session.add(row)
            await session.commit()
            created_id = row.id
        logger.info("Created {} {}", self.name, created_id)
        return await self.find_by_id(created_id)

    async def update_by_id(self, id: str, record: BaseModel):
        """Replaces every field of the record at `id`; returns None if it does not exist."""
        async with self.db.session() as session:
            row = await session.get(self.model, id)
            if row is None:
                return None
            await self._assign(session, row, record)
            await session.commit()
        logger.info("Updated {} {}", self.name, id)
        return await self.find_by_id(id)

    async def delete_by_id(self, id: str) -> bool:
        async with self.db.session() as session:
            row = await session.get(self.model, id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
        logger.info("Deleted {} {}", self.name, id)
        return True
