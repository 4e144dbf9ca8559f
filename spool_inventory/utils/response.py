# spool_inventory/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any, Sequence
from pydantic import BaseModel

T = TypeVar("T")


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def list_data(items: Sequence[Any]) -> Dict[str, Any]:
    """``{total, items}`` body shared by every filament listing."""
    return {
        "total": len(items),
        "items": list(items),
    }


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None
