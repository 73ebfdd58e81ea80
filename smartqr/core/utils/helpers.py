import re
from typing import Dict, Union

MOBILE_PATTERN = re.compile(r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE)
IOS_PATTERN = re.compile(r"iPad|iPhone|iPod")
ANDROID_PATTERN = re.compile(r"Android")


def format_currency(amount: Union[int, str]) -> str:
    """Format số tiền theo định dạng VND"""
    try:
        return f"{int(amount):,} VND"
    except (TypeError, ValueError):
        return f"{amount} VND"


def detect_device(user_agent: str) -> Dict:
    """
    Nhận diện thiết bị từ User-Agent để frontend chọn cách mở app ngân hàng.

    Returns:
        Dict: isMobile, isIOS, isAndroid và platform ("ios", "android" hoặc "desktop")
    """
    user_agent = user_agent or ""
    is_ios = bool(IOS_PATTERN.search(user_agent))
    is_android = bool(ANDROID_PATTERN.search(user_agent))
    return {
        "isMobile": bool(MOBILE_PATTERN.search(user_agent)),
        "isIOS": is_ios,
        "isAndroid": is_android,
        "platform": "ios" if is_ios else "android" if is_android else "desktop",
    }
