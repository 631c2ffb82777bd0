from __future__ import annotations

from typing import Any

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from eduhub.config import settings

Base = declarative_base()


class Database:
    Model = Base
    Column = Column
    Integer = Integer
    String = String
    Text = Text
    Float = Float
    Boolean = Boolean
    DateTime = DateTime
    Enum = Enum
    ForeignKey = ForeignKey
    UniqueConstraint = UniqueConstraint
    CheckConstraint = CheckConstraint
    Index = Index
    relationship = staticmethod(relationship)

    def __init__(self, database_url: str, **engine_options: Any):
        if database_url.startswith("sqlite"):
            engine_options.setdefault("connect_args", {"check_same_thread": False})
        self.engine = create_engine(database_url, future=True, **engine_options)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    def __getattr__(self, item: str) -> Any:
        return getattr(Base, item)


db = Database(settings.SQLALCHEMY_DATABASE_URI)
