import asyncio
from typing import List, Optional

from smartqr.core.infrastructure.vietqr_client import VietQRClient
from smartqr.domains.banking.models import BankDeeplink


class BankDeeplinkService:
    """
    Danh sách app ngân hàng hỗ trợ deeplink để mở app và quét QR trên điện thoại.

    Danh sách được tải một lần ở lần gọi đầu tiên và giữ trong bộ nhớ
    suốt vòng đời process.
    """

    def __init__(self, client: VietQRClient, deeplink_url: str):
        self.client = client
        self.deeplink_url = deeplink_url
        self._deeplinks: Optional[List[BankDeeplink]] = None
        self._load_lock = asyncio.Lock()

    async def load_bank_apps(self) -> List[BankDeeplink]:
        """
        Tải danh sách app từ VietQR.

        Raises:
            UpstreamError: Khi không tải được danh sách
        """
        apps = await self.client.fetch_deeplink_apps(self.deeplink_url)
        self._deeplinks = [
            BankDeeplink(
                app_id=app.get("appId", ""),
                app_logo=app.get("appLogo"),
                app_name=app.get("appName", ""),
                bank_name=app.get("bankName", ""),
                deeplink=app.get("deeplink", ""),
                has_autofill=app.get("autofill") == 1,
                monthly_install=app.get("monthlyInstall") or 0,
            )
            for app in apps
        ]
        return self._deeplinks

    async def get_all_deeplinks(self) -> List[BankDeeplink]:
        """Trả về tất cả deeplinks, không lọc theo ngân hàng hay thiết bị."""
        if self._deeplinks is not None:
            return list(self._deeplinks)

        async with self._load_lock:
            if self._deeplinks is None:
                await self.load_bank_apps()
        return list(self._deeplinks)
