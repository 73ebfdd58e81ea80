import base64
import binascii
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from smartqr.core.exceptions import UpstreamError


def qr_image_from_data_url(data_url: str) -> BytesIO:
    """
    Chuyển data URL ảnh QR từ VietQR ("data:image/png;base64,...") thành PNG trong bộ nhớ.

    Ảnh có mode RGBA, LA hoặc P được chuyển sang RGB trước khi lưu PNG.

    Returns:
        BytesIO: Dữ liệu PNG, con trỏ ở đầu buffer

    Raises:
        UpstreamError: Data URL không hợp lệ hoặc không phải ảnh
    """
    _, _, encoded = (data_url or "").partition("base64,")
    if not encoded:
        raise UpstreamError("VietQR returned an invalid QR image")

    try:
        image = Image.open(BytesIO(base64.b64decode(encoded)))
        image.load()
    except (binascii.Error, UnidentifiedImageError, OSError) as e:
        print(f"❌ Không đọc được ảnh QR: {e}")
        raise UpstreamError("VietQR returned an invalid QR image") from e

    print(f"🖼️ Đã tải ảnh QR - Kích thước: {image.size}, Mode: {image.mode}")
    if image.mode in ('RGBA', 'LA', 'P'):
        image = image.convert('RGB')

    img_buffer = BytesIO()
    image.save(img_buffer, format='PNG')
    img_buffer.seek(0)
    return img_buffer
