import os
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from smartqr.core.exceptions import ConfigError

# Đọc file .env (nếu có) trước khi Settings lấy giá trị từ environment
load_dotenv(find_dotenv(usecwd=True))


class Settings:
    """
    Cấu hình toàn bộ ứng dụng từ environment variables và default values.

    Settings class quản lý tất cả các cấu hình cần thiết cho ứng dụng bao gồm:
    - FastAPI server configuration
    - VietQR API credentials và endpoints
    - Gemini API credentials và model

    Tất cả settings có thể được override bằng environment variables.
    """

    # ===== FASTAPI SERVER SETTINGS =====
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ALLOW_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
    ]

    # ===== VIETQR SERVICE SETTINGS =====
    # Thông tin xác thực và endpoints cho VietQR API
    VIETQR_CLIENT_ID: str = os.getenv("VIETQR_CLIENT_ID", "")
    VIETQR_API_KEY: str = os.getenv("VIETQR_API_KEY", "")
    VIETQR_API_BASE_URL: str = os.getenv("VIETQR_API_BASE_URL", "https://api.vietqr.io/v2")
    VIETQR_TIMEOUT_SECONDS: float = float(os.getenv("VIETQR_TIMEOUT_SECONDS", "10"))
    VIETQR_QR_FORMAT: str = os.getenv("VIETQR_QR_FORMAT", "compact")
    SUPPORTED_QR_FORMATS = ("compact", "qr_only", "print")
    VIETQR_DEEPLINK_URL: str = os.getenv(
        "VIETQR_DEEPLINK_URL", "https://api.vietqr.io/v2/ios-app-deeplinks"
    )

    # ===== GEMINI SETTINGS =====
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-pro")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.1"))

    # ===== CACHE SETTINGS =====
    BANK_CACHE_TTL_HOURS: int = int(os.getenv("BANK_CACHE_TTL_HOURS", "24"))

    # Tên hiển thị khi không tra cứu được tên chủ tài khoản
    FALLBACK_ACCOUNT_NAME: str = "ACCOUNT HOLDER"

    # Giá trị mẫu trong file .env.example, coi như chưa cấu hình
    PLACEHOLDER_VALUES = {
        "VIETQR_CLIENT_ID": "your_vietqr_client_id_here",
        "VIETQR_API_KEY": "your_vietqr_api_key_here",
        "GEMINI_API_KEY": "your_gemini_api_key_here",
    }

    def get_missing_credentials(self) -> List[str]:
        """
        Liệt kê các biến môi trường bắt buộc còn trống hoặc vẫn là giá trị mẫu.

        Returns:
            List[str]: Tên biến theo thứ tự khai báo, rỗng nếu đã cấu hình đủ
        """
        missing_vars = []
        for var, placeholder in self.PLACEHOLDER_VALUES.items():
            value = (getattr(self, var, "") or "").strip()
            if not value or value == placeholder:
                missing_vars.append(var)
        return missing_vars

    def validate_credentials(self):
        """
        Kiểm tra credentials trước khi gọi bất kỳ API bên ngoài nào.

        Raises:
            ConfigError: Một lỗi duy nhất liệt kê tất cả biến còn thiếu,
                hoặc VIETQR_QR_FORMAT không nằm trong các template VietQR hỗ trợ
        """
        missing_vars = self.get_missing_credentials()
        if missing_vars:
            raise ConfigError(
                f"Missing or invalid API keys: {', '.join(missing_vars)}. "
                "Please configure your .env file with valid API keys."
            )

        format_error = self.get_qr_format_error()
        if format_error:
            raise ConfigError(format_error)

    def get_qr_format_error(self) -> Optional[str]:
        """Trả về thông báo lỗi nếu VIETQR_QR_FORMAT không hợp lệ, None nếu hợp lệ."""
        if self.VIETQR_QR_FORMAT in self.SUPPORTED_QR_FORMATS:
            return None
        return (
            f"Invalid VIETQR_QR_FORMAT: {self.VIETQR_QR_FORMAT!r}. "
            f"Supported values: {', '.join(self.SUPPORTED_QR_FORMATS)}."
        )


# Global settings instance - sử dụng trong toàn bộ ứng dụng
settings = Settings()
