from .transfer import NO_AMOUNT, UNKNOWN_ACCOUNT_NAME, ParsedTransferInfo

__all__ = [
    "NO_AMOUNT",
    "UNKNOWN_ACCOUNT_NAME",
    "ParsedTransferInfo",
]
