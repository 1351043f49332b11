import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union


class EnhancedJSONEncoder(json.JSONEncoder):
    """Encoder for Decimal, datetime, enums and Pydantic models."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj, key=str)
        return super().default(obj)


def dumps(obj: Any, **kwargs) -> str:
    """json.dumps with Decimal, datetime and model support."""
    return json.dumps(obj, cls=EnhancedJSONEncoder, **kwargs)


def loads(s: Union[str, bytes, bytearray], **kwargs) -> Any:
    return json.loads(s, **kwargs)
