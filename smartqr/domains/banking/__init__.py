"""
Banking domain: danh bạ ngân hàng VietQR và deeplinks app ngân hàng
"""
