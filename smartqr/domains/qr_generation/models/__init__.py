from .qr import (
    QRFormat,
    QRGenerationRequest,
    BankInfoSummary,
    QRGenerationResult,
    GenerateQRRequest,
    GenerateQRResponse
)

__all__ = [
    "QRFormat",
    "QRGenerationRequest",
    "BankInfoSummary",
    "QRGenerationResult",
    "GenerateQRRequest",
    "GenerateQRResponse"
]
