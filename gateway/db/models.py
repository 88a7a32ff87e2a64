"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gateway.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    plan_type = Column(String(20), nullable=False, default="free")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tokens = relationship("CustomerToken", back_populates="customer", cascade="all, delete-orphan")


class CustomerToken(Base):
    __tablename__ = "customer_tokens"

    token = Column(String(255), primary_key=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Customer", back_populates="tokens")


class DispatchLimits(Base):
    __tablename__ = "dispatch_limits"

    script_id = Column(String(63), primary_key=True)
    cpu_ms = Column(Integer, nullable=True)
    memory = Column(Integer, nullable=True)


class OutboundWorker(Base):
    __tablename__ = "outbound_workers"

    script_id = Column(String(63), primary_key=True)
    outbound_script_id = Column(String(63), nullable=False)


__all__ = ["Customer", "CustomerToken", "DispatchLimits", "OutboundWorker", "generate_uuid"]
