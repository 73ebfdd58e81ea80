from fastapi import APIRouter, Depends, Request

from smartqr.core.dependencies import get_bank_directory, get_deeplink_service
from smartqr.core.utils.helpers import detect_device
from smartqr.domains.banking.services import BankDeeplinkService, BankDirectory

router = APIRouter(tags=["Banks"])


@router.get("/banks")
async def list_banks(directory: BankDirectory = Depends(get_bank_directory)):
    """Danh sách ngân hàng VietQR hỗ trợ (từ cache 24 giờ)."""
    banks = await directory.get_banks()
    return {
        "success": True,
        "data": [bank.model_dump(by_alias=True) for bank in banks]
    }


@router.get("/bank-deeplinks")
async def list_bank_deeplinks(request: Request,
                              deeplink_service: BankDeeplinkService = Depends(get_deeplink_service)):
    """Tất cả deeplinks app ngân hàng kèm thông tin thiết bị của người gọi."""
    deeplinks = await deeplink_service.get_all_deeplinks()
    return {
        "success": True,
        "data": [deeplink.model_dump(by_alias=True) for deeplink in deeplinks],
        "device": detect_device(request.headers.get("user-agent", ""))
    }
