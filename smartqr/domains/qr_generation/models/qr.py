from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class QRFormat(str, Enum):
    COMPACT = "compact"
    QR_ONLY = "qr_only"
    PRINT = "print"


class QRGenerationRequest(BaseModel):
    """Body gửi đến VietQR /generate. acq_id là BIN của ngân hàng nhận."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    account_no: str = Field(alias="accountNo")
    account_name: str = Field(alias="accountName")
    acq_id: str = Field(alias="acqId")
    add_info: str = Field(default="", alias="addInfo")
    amount: Optional[int] = None
    format: QRFormat = QRFormat.COMPACT

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class BankInfoSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bank_name: str = Field(alias="bankName")
    bank_code: str = Field(alias="bankCode")
    account_name: str = Field(alias="accountName")
    amount: str
    message: str = ""


class QRGenerationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    qr_data_url: str = Field(alias="qrDataURL")
    qr_code: Optional[str] = Field(default=None, alias="qrCode")
    bank_info: BankInfoSummary = Field(alias="bankInfo")


class GenerateQRRequest(BaseModel):
    """Body của POST /api/generate-qr."""

    model_config = ConfigDict(populate_by_name=True)

    input_text: Optional[str] = Field(default=None, alias="inputText")
    account_number: Optional[str] = Field(default=None, alias="accountNumber")


class GenerateQRResponse(BaseModel):
    success: bool
    data: Optional[QRGenerationResult] = None
    error: Optional[str] = None
