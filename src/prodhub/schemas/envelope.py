"""Uniform JSON response envelope.

Learn: every endpoint answers with the same shape:
- success: always present
- data: the payload (object or list)
- message: human-readable confirmation for mutations
- count: number of items, on list endpoints

Errors use {"success": false, "error": "..."}; see errors.py.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    count: Optional[int] = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str


def ok(data=None, message: Optional[str] = None, count: Optional[int] = None) -> dict:
    """Build a success envelope. `count` is filled in for lists."""
    if count is None and isinstance(data, list):
        count = len(data)
    return {"success": True, "data": data, "message": message, "count": count}
