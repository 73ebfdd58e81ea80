from typing import Optional

from pydantic import BaseModel, ConfigDict

UNKNOWN_ACCOUNT_NAME = "UNKNOWN"
NO_AMOUNT = "0"


class ParsedTransferInfo(BaseModel):
    """Thông tin chuyển khoản trích xuất từ câu nhập tự do."""

    model_config = ConfigDict(frozen=True)

    bank: str
    account_name: str = UNKNOWN_ACCOUNT_NAME
    amount: str = NO_AMOUNT
    account_number: Optional[str] = None
    message: str = ""

    @property
    def has_amount(self) -> bool:
        return self.amount != NO_AMOUNT
