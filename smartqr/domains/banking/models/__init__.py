from .bank import Bank, BankDeeplink

__all__ = [
    "Bank",
    "BankDeeplink",
]
