"""
SmartQR - tạo mã VietQR từ câu chuyển khoản tiếng Việt tự do
"""

__version__ = "1.0.0"
