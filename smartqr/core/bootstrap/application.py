from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from smartqr import __version__
from smartqr.core.config.settings import Settings
from smartqr.core.exceptions import SmartQRError
from smartqr.core.infrastructure.cache_service import BankDirectoryCache
from smartqr.core.infrastructure.gemini_client import GeminiClient
from smartqr.core.infrastructure.vietqr_client import VietQRClient
from smartqr.domains.banking.services import BankDeeplinkService, BankDirectory
from smartqr.domains.parsing.services import GeminiTextParser, PromptBuilder
from smartqr.domains.qr_generation.services import AccountNameResolver, QROrchestrator


@dataclass
class ServiceContainer:
    """Các service dùng chung, mỗi loại chỉ có một instance trong process."""

    settings: Settings
    vietqr_client: VietQRClient
    bank_cache: BankDirectoryCache
    bank_directory: BankDirectory
    deeplink_service: BankDeeplinkService
    orchestrator: QROrchestrator


def build_container(settings: Settings) -> ServiceContainer:
    """
    Khởi tạo toàn bộ service từ cấu hình.

    Args:
        settings (Settings): Cấu hình ứng dụng

    Returns:
        ServiceContainer: Các service đã được nối với nhau
    """
    vietqr_client = VietQRClient(
        client_id=settings.VIETQR_CLIENT_ID,
        api_key=settings.VIETQR_API_KEY,
        base_url=settings.VIETQR_API_BASE_URL,
        timeout=settings.VIETQR_TIMEOUT_SECONDS,
    )
    bank_cache = BankDirectoryCache(ttl=timedelta(hours=settings.BANK_CACHE_TTL_HOURS))
    bank_directory = BankDirectory(vietqr_client, bank_cache)
    parser = GeminiTextParser(
        GeminiClient(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
            temperature=settings.GEMINI_TEMPERATURE,
        ),
        PromptBuilder(),
    )
    resolver = AccountNameResolver(vietqr_client, settings.FALLBACK_ACCOUNT_NAME)

    return ServiceContainer(
        settings=settings,
        vietqr_client=vietqr_client,
        bank_cache=bank_cache,
        bank_directory=bank_directory,
        deeplink_service=BankDeeplinkService(vietqr_client, settings.VIETQR_DEEPLINK_URL),
        orchestrator=QROrchestrator(bank_directory, parser, resolver, vietqr_client, settings),
    )


class ApplicationBootstrap:
    """
    Bootstrap toàn bộ ứng dụng.

    Lớp này chịu trách nhiệm khởi tạo các service, kiểm tra cấu hình
    và làm nóng cache danh sách ngân hàng.

    Attributes:
        settings (Settings): Cấu hình ứng dụng
        container (ServiceContainer): Các service sau khi khởi tạo
        startup_time (datetime): Thời điểm bắt đầu khởi tạo ứng dụng
        is_initialized (bool): Trạng thái khởi tạo của ứng dụng
    """

    def __init__(self, settings: Settings, container: Optional[ServiceContainer] = None):
        self.settings = settings
        self.container = container
        self.startup_time = None
        self.is_initialized = False
        self.missing_credentials = []

    async def initialize(self, warm_cache: bool = True) -> ServiceContainer:
        """
        Khởi tạo toàn bộ ứng dụng theo thứ tự:
        1. Tạo các service
        2. Kiểm tra biến môi trường bắt buộc
        3. Làm nóng cache danh sách ngân hàng (lỗi chỉ được ghi log)
        """
        print("🚀 Bắt đầu khởi tạo ứng dụng...")
        self.startup_time = datetime.now()

        if self.container is None:
            self.container = build_container(self.settings)

        self._validate_configuration()

        if warm_cache and not self.missing_credentials:
            await self._warm_bank_cache()

        self.is_initialized = True
        elapsed = (datetime.now() - self.startup_time).total_seconds()
        print(f"✅ Khởi tạo ứng dụng hoàn tất trong {elapsed:.2f}s")
        return self.container

    def _validate_configuration(self):
        print("🔍 Đang kiểm tra cấu hình...")
        self.missing_credentials = self.settings.get_missing_credentials()
        if self.missing_credentials:
            print(f"   ⚠️ Thiếu các biến môi trường: {', '.join(self.missing_credentials)}")
        else:
            print("   ✅ Tất cả biến môi trường bắt buộc đều có")

        format_error = self.settings.get_qr_format_error()
        if format_error:
            print(f"   ⚠️ {format_error}")

    async def _warm_bank_cache(self):
        print("🏗️ Đang tải trước danh sách ngân hàng...")
        try:
            banks = await self.container.bank_directory.get_banks()
            print(f"   ✅ Đã cache {len(banks)} ngân hàng")
        except SmartQRError as e:
            print(f"   ⚠️ Không tải trước được danh sách ngân hàng: {e.message}")

    def get_startup_info(self) -> dict:
        """
        Lấy thông tin về quá trình khởi động ứng dụng.

        Returns:
            dict: startup_time, is_initialized, uptime_seconds, missing_credentials, version
        """
        return {
            "startup_time": self.startup_time.isoformat() if self.startup_time else None,
            "is_initialized": self.is_initialized,
            "uptime_seconds": (datetime.now() - self.startup_time).total_seconds() if self.startup_time else 0,
            "missing_credentials": list(self.missing_credentials),
            "version": __version__
        }
