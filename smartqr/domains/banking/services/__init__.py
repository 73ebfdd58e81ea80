from .bank_directory import BankDirectory
from .deeplink_service import BankDeeplinkService

__all__ = [
    "BankDirectory",
    "BankDeeplinkService",
]
