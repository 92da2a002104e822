# schoolhub/utils/serialization.py
"""Turn ORM rows into JSON-ready dictionaries."""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import inspect

HIDDEN_FIELDS = {"password_hash", "is_deleted"}


def to_json_value(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, list):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value


def serialize_model(obj: Any, exclude: Optional[Iterable[str]] = None) -> Optional[Dict[str, Any]]:
    """Column values of a mapped object, minus hidden fields"""
    if obj is None:
        return None
    skipped = HIDDEN_FIELDS | set(exclude or ())
    return {
        column.key: to_json_value(getattr(obj, column.key))
        for column in inspect(obj).mapper.column_attrs
        if column.key not in skipped
    }


def serialize_list(objs: Iterable[Any], exclude: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
    return [serialize_model(obj, exclude) for obj in objs]


def serialize_page(page: Dict[str, Any], exclude: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Serialize the items of a BaseService.get_paginated result"""
    return {**page, "items": serialize_list(page["items"], exclude)}
