"""
Core: cấu hình, lỗi, infrastructure clients, bootstrap và routers hệ thống
"""
