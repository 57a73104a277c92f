# storefront/utils/json.py

from typing import Any, Optional
import json


def safe_loads(v: Any) -> Any:
    if v is None or v == "":
        return None
    if isinstance(v, (dict, list)):
        return v
    return json.loads(v)
