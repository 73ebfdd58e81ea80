class SmartQRError(Exception):
    """
    Lỗi gốc của ứng dụng.

    Mỗi lớp con mang theo HTTP status code để router trả về
    response dạng {"success": false, "error": message}.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(SmartQRError):
    """Thiếu hoặc sai API keys, phát hiện trước mọi lời gọi mạng."""

    status_code = 500


class UpstreamError(SmartQRError):
    """API bên thứ ba trả về lỗi hoặc không kết nối được."""

    status_code = 502


class DirectoryFetchError(UpstreamError):
    """Không lấy được danh sách ngân hàng từ VietQR."""


class ParseError(SmartQRError):
    """Kết quả phân tích văn bản từ AI không hợp lệ hoặc thiếu trường."""

    status_code = 422


class ValidationError(SmartQRError):
    """Dữ liệu người dùng nhập chưa đủ (thiếu số tài khoản, không tìm thấy ngân hàng)."""

    status_code = 400
