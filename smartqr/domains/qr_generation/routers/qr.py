from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from smartqr.core.dependencies import get_orchestrator
from smartqr.core.exceptions import ValidationError
from smartqr.domains.qr_generation.models import GenerateQRRequest, GenerateQRResponse
from smartqr.domains.qr_generation.services import QROrchestrator, qr_image_from_data_url

router = APIRouter(tags=["QR Generation"])


def _require_input_text(body: GenerateQRRequest) -> str:
    input_text = (body.input_text or "").strip()
    if not input_text:
        raise ValidationError("inputText is required")
    return input_text


@router.post("/generate-qr")
async def generate_qr(body: GenerateQRRequest,
                      orchestrator: QROrchestrator = Depends(get_orchestrator)):
    """
    Tạo mã VietQR từ câu nhập tự do.

    Body: {"inputText": "...", "accountNumber": "..." (tùy chọn)}

    Returns:
        JSONResponse: {"success": true, "data": {"qrDataURL", "qrCode", "bankInfo"}}
        hoặc {"success": false, "error": "..."} qua exception handler
    """
    input_text = _require_input_text(body)
    print(f"📨 Nhận yêu cầu tạo QR: {input_text!r}")

    result = await orchestrator.generate(input_text, body.account_number)
    response = GenerateQRResponse(success=True, data=result)
    return JSONResponse(content=response.model_dump(by_alias=True, exclude_none=True))


@router.post("/generate-qr/image")
async def generate_qr_image(body: GenerateQRRequest,
                            orchestrator: QROrchestrator = Depends(get_orchestrator)):
    """Tạo mã VietQR và trả về file PNG để tải xuống."""
    input_text = _require_input_text(body)
    result = await orchestrator.generate(input_text, body.account_number)

    img_buffer = qr_image_from_data_url(result.qr_data_url)
    filename = f"vietqr_{result.bank_info.bank_code.lower()}.png"
    return StreamingResponse(
        img_buffer,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
