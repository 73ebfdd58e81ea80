from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Bank(BaseModel):
    """Ngân hàng trong danh sách VietQR. BIN là khóa chính dùng làm acqId khi tạo QR."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    code: str
    bin: str
    short_name: str = Field(alias="shortName")
    logo: Optional[str] = None
    transfer_supported: int = Field(default=0, alias="transferSupported")
    lookup_supported: int = Field(default=0, alias="lookupSupported")

    @field_validator("bin")
    @classmethod
    def bin_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bank BIN must not be empty")
        return value

    def prompt_line(self) -> str:
        return f"- {self.name} ({self.short_name}, {self.code}, BIN: {self.bin})"


class BankDeeplink(BaseModel):
    """App ngân hàng hỗ trợ mở bằng deeplink trên iOS."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_id: str = Field(alias="appId")
    app_logo: Optional[str] = Field(default=None, alias="appLogo")
    app_name: str = Field(alias="appName")
    bank_name: str = Field(alias="bankName")
    deeplink: str
    has_autofill: bool = Field(default=False, alias="hasAutofill")
    monthly_install: int = Field(default=0, alias="monthlyInstall")
