# storefront/catalog/display.py

_DISPLAY_NAMES = {
    "men": "Shop Men",
    "catch-all": "Catch-All",
}


def capitalize_first_letter(s: str) -> str:
    return s[:1].upper() + s[1:]


def get_display_name(category: str) -> str:
    name = _DISPLAY_NAMES.get(category.lower())
    if name is not None:
        return name
    return f"Women's {capitalize_first_letter(category)}"
