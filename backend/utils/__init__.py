import enum
from decimal import Decimal

from sqlalchemy.orm import class_mapper


def sqlalchemy_to_dict(obj):
    """Convert a SQLAlchemy object to a dictionary of JSON-friendly column values."""
    if not obj:
        return None
    mapper = class_mapper(obj.__class__)
    result = {}
    for c in mapper.columns:
        value = getattr(obj, c.key)
        # Convert date/datetime objects to ISO format strings
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, enum.Enum):
            value = value.value
        result[c.key] = value
    return result


def changed_fields(old_values: dict, new_values: dict) -> dict:
    """Columns whose value differs between two ``sqlalchemy_to_dict`` snapshots."""
    return {
        key: {"old": old_values.get(key), "new": value}
        for key, value in new_values.items()
        if old_values.get(key) != value and key != "updated_at"
    }


__all__ = ['changed_fields', 'sqlalchemy_to_dict']
