"""Pydantic schemas used across the project."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Upper bound of the signed 32-bit INTEGER columns holding limits.
MAX_LIMIT = 2**31 - 1


class LimitsPayload(BaseModel):
    cpu_ms: Optional[StrictInt] = Field(default=None, alias="cpuMs", ge=0, le=MAX_LIMIT)
    memory: Optional[StrictInt] = Field(default=None, ge=0, le=MAX_LIMIT)

    model_config = ConfigDict(populate_by_name=True)


class DispatchConfigPayload(BaseModel):
    limits: Optional[LimitsPayload] = None


class ScriptUploadRequest(BaseModel):
    script: str
    dispatch_config: DispatchConfigPayload = Field(default_factory=DispatchConfigPayload)


class MessageResponse(BaseModel):
    message: str


class CustomerResponse(BaseModel):
    id: str
    name: str
    plan_type: str

    model_config = ConfigDict(from_attributes=True)


UPLOAD_BODY_SHAPE = "{ script: string, dispatch_config: { limits?: { cpuMs: number, memory: number } } }"


__all__ = [
    "CustomerResponse",
    "DispatchConfigPayload",
    "LimitsPayload",
    "MAX_LIMIT",
    "MessageResponse",
    "ScriptUploadRequest",
    "UPLOAD_BODY_SHAPE",
]
