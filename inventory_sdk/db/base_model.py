# inventory_sdk/db/base_model.py
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, func
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelWithMeta(SQLModel):
    """
    Общие поля всех таблиц: id и метки времени.
    created_at выставляется один раз при создании и дальше не меняется
    (LocalDataAccessManager исключает его из обновлений).
    """

    id: Optional[uuid.UUID] = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
        nullable=False,
        description="Уникальный идентификатор записи (UUID)",
    )

    created_at: Optional[datetime] = Field(
        default_factory=utcnow,
        nullable=False,
        index=True,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={
            "server_default": func.now(),
            "comment": "Дата и время создания записи (UTC)",
        },
        description="Дата и время создания записи (UTC)",
    )

    updated_at: Optional[datetime] = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={
            "server_default": func.now(),
            "onupdate": func.now(),
            "comment": "Дата и время последнего обновления записи (UTC)",
        },
        description="Дата и время последнего обновления записи (UTC)",
    )
