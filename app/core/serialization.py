"""Convert MongoDB documents into JSON-friendly dicts."""

from typing import Any

from bson import ObjectId


def serialize_document(value: Any) -> Any:
    """Recursively replace ObjectIds with their string form."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value
