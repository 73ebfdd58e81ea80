from .account_name_resolver import AccountNameResolver
from .qr_image import qr_image_from_data_url
from .qr_orchestrator import QROrchestrator

__all__ = [
    "AccountNameResolver",
    "qr_image_from_data_url",
    "QROrchestrator"
]
