"""
QR generation domain: xác định tên chủ tài khoản và tạo mã VietQR
"""
