"""Pydantic models for the Kachy Valkey HTTP API responses."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SetResponse(_Envelope):
    success: bool


class GetResponse(_Envelope):
    value: Optional[str] = None


class DeleteResponse(_Envelope):
    deleted: bool


class ExistsResponse(_Envelope):
    exists: bool


class ExpireResponse(_Envelope):
    success: bool


class TtlResponse(_Envelope):
    ttl: int


class ExecResponse(_Envelope):
    result: Any = None


__all__ = [
    "SetResponse",
    "GetResponse",
    "DeleteResponse",
    "ExistsResponse",
    "ExpireResponse",
    "TtlResponse",
    "ExecResponse",
]
