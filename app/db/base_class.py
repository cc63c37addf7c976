# /app/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class _BaseModel:
    """
    Shared declarative base. Models that do not set `__tablename__`
    explicitly get their lowercased class name as the table name.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


Base = declarative_base(cls=_BaseModel)
