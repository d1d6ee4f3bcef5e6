"""SQLAlchemy ORM models"""

from sqlalchemy import Column, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class PlanSnapshot(Base):
    """Serialized plan collection, one row per tracker key"""

    __tablename__ = "plan_snapshot"

    key = Column(Text, primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
