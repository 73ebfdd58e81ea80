from .cache_service import BankDirectoryCache
from .gemini_client import GeminiClient
from .vietqr_client import VietQRClient

__all__ = [
    "BankDirectoryCache",
    "GeminiClient",
    "VietQRClient",
]
