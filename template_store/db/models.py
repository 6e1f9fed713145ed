"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, Enum, Index, Integer, String

from template_store.core.config import get_settings
from template_store.domain.templates.models import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    TEMPLATE_TYPE_MAX_LENGTH,
    OwnerType,
)
from template_store.infrastructure.database.base import Base
from template_store.infrastructure.database.types import CompressedText


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Template(Base):
    __tablename__ = "templates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String(36), nullable=False)
    owner_type = Column(
        Enum(
            OwnerType,
            name="owner_type",
            native_enum=False,
            length=20,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    template_type = Column(String(TEMPLATE_TYPE_MAX_LENGTH), nullable=False)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH))
    body = Column(CompressedText(get_settings().templates.compression_level), nullable=False)
    usage_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True))
    # Present in the schema; no query reads or writes it.
    deleted_at = Column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Template id={self.id} owner={self.owner_type}:{self.owner_id} name={self.name!r}>"


Index("ix_templates_owner_type", Template.owner_id, Template.owner_type, Template.template_type)
Index("ix_templates_owner_usage", Template.owner_id, Template.usage_count.desc())
Index(
    "uq_templates_owner_type_name",
    Template.owner_id,
    Template.owner_type,
    Template.template_type,
    Template.name,
    unique=True,
)
