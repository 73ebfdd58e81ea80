import asyncio
from typing import Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from smartqr.core.infrastructure.cache_service import BankDirectoryCache
from smartqr.core.infrastructure.vietqr_client import VietQRClient
from smartqr.domains.banking.models import Bank


class BankDirectory:
    """
    Danh bạ ngân hàng VietQR với cache 24 giờ.

    BankDirectory được khởi tạo một lần khi ứng dụng start và truyền vào
    các service cần nó (orchestrator, router /banks).

    Attributes:
        client (VietQRClient): Client gọi VietQR API
        cache (BankDirectoryCache): Cache danh sách ngân hàng
    """

    def __init__(self, client: VietQRClient, cache: BankDirectoryCache):
        self.client = client
        self.cache = cache
        self._refresh_lock = asyncio.Lock()

    async def get_banks(self) -> Tuple[Bank, ...]:
        """
        Lấy danh sách ngân hàng, ưu tiên cache còn hiệu lực.

        Khi cache hết hạn, chỉ một request thực hiện fetch; các request khác
        chờ lock rồi đọc lại cache vừa được cập nhật.

        Returns:
            Tuple[Bank, ...]: Danh sách ngân hàng theo thứ tự VietQR trả về

        Raises:
            DirectoryFetchError: Khi VietQR trả lỗi hoặc không kết nối được
        """
        banks = self.cache.get()
        if banks is not None:
            return banks

        async with self._refresh_lock:
            banks = self.cache.get()
            if banks is not None:
                return banks

            print("📡 Đang tải danh sách ngân hàng từ VietQR...")
            raw_banks = await self.client.fetch_banks()
            return self.cache.replace(self._to_banks(raw_banks))

    @staticmethod
    def _to_banks(raw_banks: Sequence[dict]) -> list:
        banks = []
        for raw in raw_banks:
            try:
                banks.append(Bank.model_validate(raw))
            except PydanticValidationError as e:
                print(f"⚠️ Bỏ qua ngân hàng không hợp lệ {raw.get('shortName', raw)}: {e.error_count()} lỗi")
        return banks

    @staticmethod
    def match_bank(banks: Sequence[Bank], query: str) -> Optional[Bank]:
        """
        Tìm ngân hàng đầu tiên có name, shortName, code hoặc BIN chứa query.

        So khớp không phân biệt hoa thường; nhiều ngân hàng cùng khớp thì lấy
        ngân hàng đứng trước trong danh sách.

        Returns:
            Optional[Bank]: Ngân hàng tìm được, None nếu không khớp
        """
        query = (query or "").lower().strip()
        if not query:
            return None

        for bank in banks:
            if (query in bank.name.lower()
                    or query in bank.short_name.lower()
                    or query in bank.code.lower()
                    or query in bank.bin.lower()):
                return bank
        return None

    async def find_bank(self, query: str) -> Optional[Bank]:
        banks = await self.get_banks()
        return self.match_bank(banks, query)

    @staticmethod
    def format_for_prompt(banks: Sequence[Bank]) -> str:
        """Định dạng danh sách ngân hàng để nhúng vào prompt cho AI."""
        return "\n".join(bank.prompt_line() for bank in banks)
