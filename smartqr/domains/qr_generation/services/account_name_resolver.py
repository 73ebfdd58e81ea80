from typing import Optional

from smartqr.core.infrastructure.vietqr_client import VietQRClient
from smartqr.domains.parsing.models import UNKNOWN_ACCOUNT_NAME


class AccountNameResolver:
    """
    Xác định tên chủ tài khoản hiển thị trên QR.

    Nếu AI không trích xuất được tên, tra cứu qua VietQR /lookup.
    Tra cứu thất bại không bao giờ làm hỏng pipeline: trả về tên dự phòng.
    """

    def __init__(self, client: VietQRClient, fallback_name: str = "ACCOUNT HOLDER"):
        self.client = client
        self.fallback_name = fallback_name

    async def resolve(self, bank_bin: str, account_number: str, parsed_name: Optional[str]) -> str:
        """
        Args:
            bank_bin (str): BIN của ngân hàng
            account_number (str): Số tài khoản
            parsed_name (Optional[str]): Tên do AI trích xuất, có thể là "UNKNOWN"

        Returns:
            str: Tên đã trích xuất, tên tra cứu được hoặc tên dự phòng
        """
        if parsed_name and parsed_name.strip().upper() != UNKNOWN_ACCOUNT_NAME:
            return parsed_name

        print("🔍 Không có tên chủ tài khoản trong nội dung, đang tra cứu qua VietQR...")
        try:
            data = await self.client.lookup_account(bank_bin, account_number)
        except Exception as e:
            print(f"⚠️ Tra cứu tài khoản thất bại, dùng tên dự phòng: {e}")
            return self.fallback_name

        account_name = data.get("accountName") if isinstance(data, dict) else None
        account_name = account_name.strip() if isinstance(account_name, str) else ""
        if not account_name:
            print("⚠️ VietQR không trả về tên chủ tài khoản, dùng tên dự phòng")
            return self.fallback_name

        print(f"✅ Tra cứu được tên chủ tài khoản: {account_name}")
        return account_name
