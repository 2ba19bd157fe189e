# mediacat/database/core/service_object.py
from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column, declared_attr


class ServiceObject:
    """
    Mixin providing the common primary key for persisted models.
    Use with multiple inheritance: `class MyModel(ServiceObject, Base): ...`

    Ids are positive integers assigned by the database on insert.
    """
    __abstract__ = True

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)
