import asyncio
from typing import Any, Dict, List, Optional

import requests

from smartqr.core.exceptions import DirectoryFetchError, UpstreamError


class VietQRClient:
    """
    Client gọi VietQR API (https://api.vietqr.io/v2).

    Cung cấp 3 endpoint mà pipeline cần:
    - GET  /banks    : danh sách ngân hàng hỗ trợ
    - POST /generate : tạo mã QR thanh toán
    - POST /lookup   : tra cứu tên chủ tài khoản

    Mọi response đều theo quy ước {"code", "desc", "data"} với code "00" là thành công.
    Mỗi request chỉ gửi một lần, không retry.

    Attributes:
        base_url (str): URL gốc của VietQR API
        timeout (float): Timeout cho mỗi request (giây)
    """

    SUCCESS_CODE = "00"

    def __init__(self, client_id: str, api_key: str,
                 base_url: str = "https://api.vietqr.io/v2", timeout: float = 10):
        self.client_id = client_id
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-client-id": self.client_id,
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, payload: Optional[Dict] = None,
                       error_cls=UpstreamError) -> Dict[str, Any]:
        """
        Gửi request đến VietQR trong worker thread và kiểm tra mã kết quả.

        Args:
            method (str): "GET" hoặc "POST"
            path (str): Đường dẫn endpoint, ví dụ "/banks"
            payload (Dict, optional): JSON body cho POST
            error_cls: Lớp lỗi sẽ raise khi thất bại

        Returns:
            Dict[str, Any]: Toàn bộ JSON response khi code == "00"

        Raises:
            UpstreamError: Lỗi mạng, HTTP status lỗi, JSON lỗi hoặc code khác "00"
        """
        url = f"{self.base_url}{path}"
        print(f"📡 VietQR {method} {path}")

        try:
            response = await asyncio.to_thread(
                requests.request,
                method,
                url,
                json=payload,
                headers=self._get_headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            print(f"⏰ Timeout khi gọi VietQR {path} (quá {self.timeout} giây)")
            raise error_cls(f"VietQR API timeout on {path}")
        except requests.exceptions.ConnectionError:
            print(f"🔌 Lỗi kết nối đến VietQR {path}")
            raise error_cls(f"Cannot connect to VietQR API ({path})")
        except requests.exceptions.HTTPError as e:
            print(f"🚫 Lỗi HTTP từ VietQR {path}: {e}")
            raise error_cls(f"VietQR API returned HTTP {response.status_code} on {path}")
        except requests.exceptions.RequestException as e:
            print(f"❌ Lỗi request khi gọi VietQR {path}: {e}")
            raise error_cls(f"VietQR API request failed on {path}")
        except ValueError:
            print(f"❌ VietQR {path} trả về dữ liệu không phải JSON")
            raise error_cls(f"VietQR API returned an invalid response on {path}")

        if not isinstance(data, dict) or data.get("code") != self.SUCCESS_CODE:
            desc = data.get("desc", "Unknown error") if isinstance(data, dict) else "Unknown error"
            print(f"❌ VietQR {path} trả về lỗi: {desc}")
            raise error_cls(f"VietQR API error: {desc}")

        return data

    async def fetch_banks(self) -> List[Dict[str, Any]]:
        """
        Lấy danh sách ngân hàng.

        Raises:
            DirectoryFetchError: Khi không lấy được danh sách
        """
        data = await self._request("GET", "/banks", error_cls=DirectoryFetchError)
        banks = data.get("data") or []
        print(f"✅ Nhận được {len(banks)} ngân hàng từ VietQR")
        return banks

    async def generate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Tạo mã QR, trả về phần "data" gồm qrCode và qrDataURL."""
        data = await self._request("POST", "/generate", payload=payload)
        result = data.get("data") or {}
        if not result.get("qrDataURL"):
            raise UpstreamError("VietQR API error: response has no QR image")
        print("✅ Tạo mã VietQR thành công")
        return result

    async def lookup_account(self, bank_bin: str, account_no: str) -> Dict[str, Any]:
        """
        Tra cứu tên chủ tài khoản.

        Returns:
            Dict[str, Any]: Phần "data" gồm accountName và accountNo (có thể rỗng)
        """
        data = await self._request("POST", "/lookup", payload={"bin": bank_bin, "accountNo": account_no})
        return data.get("data") or {}

    async def fetch_deeplink_apps(self, url: str) -> List[Dict[str, Any]]:
        """
        Lấy danh sách app ngân hàng kèm deeplink (endpoint công khai, không có "code").

        Args:
            url (str): URL đầy đủ của endpoint ios-app-deeplinks

        Returns:
            List[Dict[str, Any]]: Danh sách app trong trường "apps"
        """
        print("📡 VietQR GET ios-app-deeplinks")
        try:
            response = await asyncio.to_thread(requests.get, url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            print(f"❌ Lỗi khi tải danh sách bank apps: {e}")
            raise UpstreamError("Failed to load bank apps for deeplinks")

        apps = data.get("apps") if isinstance(data, dict) else None
        if not isinstance(apps, list):
            raise UpstreamError("Failed to load bank apps for deeplinks")
        print(f"✅ Đã tải {len(apps)} bank apps cho deeplinks")
        return apps
