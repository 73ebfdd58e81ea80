"""
Parsing domain: phân tích câu chuyển khoản tự do bằng AI
"""
