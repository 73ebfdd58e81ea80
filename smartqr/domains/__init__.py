"""
Domain packages: banking, parsing, qr_generation
"""
