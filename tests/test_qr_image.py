from PIL import Image
import pytest

from smartqr.core.exceptions import UpstreamError
from smartqr.domains.qr_generation.services import qr_image_from_data_url

from conftest import make_qr_data_url


@pytest.mark.parametrize("mode", ["RGBA", "P", "L"])
def test_data_url_is_converted_to_png(mode):
    buffer = qr_image_from_data_url(make_qr_data_url(mode))

    image = Image.open(buffer)
    assert image.format == "PNG"
    assert image.size == (32, 32)
    assert image.mode == ("L" if mode == "L" else "RGB")


@pytest.mark.parametrize("data_url", ["", "data:image/png;base64,", "data:image/png;base64,bm90IGFuIGltYWdl"])
def test_invalid_data_url_raises_upstream_error(data_url):
    with pytest.raises(UpstreamError):
        qr_image_from_data_url(data_url)
