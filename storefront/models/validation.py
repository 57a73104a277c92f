# storefront/models/validation.py

from typing import Any, List, Mapping


class ValidationError(ValueError):
    """Raised when a payload row from the data layer is missing required fields or has the wrong shape."""


def require(d: Mapping[str, Any], key: str, what: str) -> Any:
    if not isinstance(d, Mapping):
        raise ValidationError(f"{what} must be an object, got {type(d).__name__}")
    v = d.get(key)
    if v is None or v == "":
        raise ValidationError(f"{what} missing required field {key!r}")
    return v


def as_mapping(v: Any, what: str) -> Mapping[str, Any]:
    # null/undefined nested objects read as empty
    if v is None:
        return {}
    if not isinstance(v, Mapping):
        raise ValidationError(f"{what} must be an object, got {type(v).__name__}")
    return v


def as_list(v: Any, what: str) -> List[Any]:
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        raise ValidationError(f"{what} must be a list, got {type(v).__name__}")
    return list(v)


def as_int(v: Any, default: int = 0) -> int:
    # null/undefined indexes sort as 0
    if v is None or v == "":
        return default
    if isinstance(v, bool):
        raise ValidationError(f"expected an integer, got {v!r}")
    if isinstance(v, float):
        if not v.is_integer():
            raise ValidationError(f"expected an integer, got {v!r}")
        return int(v)
    try:
        return int(v)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"expected an integer, got {v!r}") from e


def as_float(v: Any, default: float = 0.0) -> float:
    if v is None or v == "":
        return default
    if isinstance(v, bool):
        raise ValidationError(f"expected a number, got {v!r}")
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"expected a number, got {v!r}") from e
