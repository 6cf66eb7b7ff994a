from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from app.db import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(128), primary_key=True, index=True)

    # JSON-encoded value, e.g. the list of saved hikes
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
