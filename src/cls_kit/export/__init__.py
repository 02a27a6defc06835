from .value import ColorFormat, color_value, to_json, to_value

__all__ = [
    "ColorFormat",
    "color_value",
    "to_json",
    "to_value",
]
