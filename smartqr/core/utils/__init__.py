from .helpers import detect_device, format_currency

__all__ = [
    "detect_device", "format_currency"
]
