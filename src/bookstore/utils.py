import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from bson import Decimal128, ObjectId


def load_settings(config_file: Path | None, required: bool = True) -> Dict[str, Any]:
    try:
        if config_file:
            with open(config_file, 'r') as config_handle:
                return json.load(config_handle)
    except Exception as e:
        if required:
            logging.error(f"Error loading config file {config_file}: {e}")
        return {}

    return {}


def deep_merge_dicts(dest, override):
    for key, value in override.items():
        if (
            key in dest
            and isinstance(dest[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge_dicts(dest[key], value)
        else:
            dest[key] = value


def normalize_id(id_value: Any) -> Optional[str]:
    """Convert a store id (ObjectId or anything else) to its string form"""
    if id_value is None:
        return None
    if isinstance(id_value, ObjectId):
        return str(id_value)
    return str(id_value) if id_value != "" else None


def to_object_id(id_value: str) -> Any:
    """Turn a string id back into an ObjectId when it looks like one"""
    if isinstance(id_value, str) and ObjectId.is_valid(id_value):
        return ObjectId(id_value)
    return id_value


def validate_id(id: str) -> bool:
    """Validate if a string is a valid ID format"""
    return bool(id and isinstance(id, str) and len(id) > 0)


def decimal_to_float(value: Any) -> Any:
    """BSON Decimal128 prices come back as floats; anything else is left alone"""
    if isinstance(value, Decimal128):
        return float(value.to_decimal())
    return value
