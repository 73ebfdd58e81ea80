from datetime import datetime

from fastapi import APIRouter, Depends

from smartqr.core.bootstrap.application import ApplicationBootstrap, ServiceContainer
from smartqr.core.dependencies import get_bootstrap, get_container

router = APIRouter(tags=["Monitoring"])


@router.get("/health")
async def health_check(bootstrap: ApplicationBootstrap = Depends(get_bootstrap)):
    """Health check, chỉ báo service nào đã cấu hình, không lộ giá trị keys."""
    settings = bootstrap.settings
    missing = settings.get_missing_credentials()
    return {
        "status": "OK" if bootstrap.is_initialized else "initializing",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "vietqr": "VIETQR_CLIENT_ID" not in missing and "VIETQR_API_KEY" not in missing,
            "gemini": "GEMINI_API_KEY" not in missing
        },
        "application": bootstrap.get_startup_info()
    }


@router.get("/cache/status")
async def get_bank_cache_status(container: ServiceContainer = Depends(get_container)):
    """Xem trạng thái bank cache"""
    return container.bank_cache.get_cache_status()


@router.post("/cache/clear")
async def clear_bank_cache(container: ServiceContainer = Depends(get_container)):
    """Clear bank cache"""
    result = container.bank_cache.clear()
    return {
        "message": "Bank cache cleared",
        "details": result
    }
