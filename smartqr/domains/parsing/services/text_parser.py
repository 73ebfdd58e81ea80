import json
import re
from typing import Any, Dict, Optional, Protocol, Sequence

from smartqr.core.exceptions import ParseError
from smartqr.core.infrastructure.gemini_client import GeminiClient
from smartqr.domains.banking.models import Bank
from smartqr.domains.banking.services.bank_directory import BankDirectory
from smartqr.domains.parsing.models import UNKNOWN_ACCOUNT_NAME, ParsedTransferInfo
from smartqr.domains.parsing.services.prompt_builder import PromptBuilder

JSON_BLOCK_PATTERN = re.compile(r"\{[\s\S]*\}")
ACCOUNT_NUMBER_PATTERN = re.compile(r"\d{6,19}")
AMOUNT_SEPARATORS = re.compile(r"[\s,.]")
THOUSANDS_GROUPED = re.compile(r"\d{1,3}(?:[\s,.]\d{3})+")
DIGITS = re.compile(r"[0-9]+")
CURRENCY_SUFFIX = re.compile(r"(vnd|vnđ|đ|d)$", re.IGNORECASE)
NULL_MARKERS = {"", "null", "none", "undefined"}
REQUIRED_FIELDS = ("bank", "accountName", "amount")


class TextUnderstanding(Protocol):
    """Khả năng chuyển câu nhập tự do thành ParsedTransferInfo."""

    async def parse(self, text: str, banks: Sequence[Bank]) -> ParsedTransferInfo:
        ...


def extract_json_object(raw_text: str) -> Dict[str, Any]:
    """
    Lấy object JSON đầu tiên trong phản hồi của model.

    Raises:
        ParseError: Không có khối {...} hoặc JSON không hợp lệ
    """
    match = JSON_BLOCK_PATTERN.search(raw_text or "")
    if not match:
        raise ParseError("No JSON found in AI response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        print(f"❌ JSON từ AI không hợp lệ: {e}")
        raise ParseError("AI response contains malformed JSON") from e

    if not isinstance(data, dict):
        raise ParseError("AI response is not a JSON object")
    return data


def normalize_amount(value: Any) -> str:
    """
    Chuẩn hóa số tiền về chuỗi chỉ gồm chữ số, "0" khi không có số tiền.

    Chấp nhận số nguyên, số thực có phần thập phân bằng 0 và chuỗi chữ số
    (có thể kèm ký hiệu tiền tệ hoặc phân cách hàng nghìn như "1.500.000").
    Không tự quy đổi "k"/"tr" và không làm tròn số lẻ.

    Raises:
        ParseError: Số tiền không phải số nguyên không âm
    """
    if isinstance(value, bool):
        raise ParseError(f"Invalid amount returned by AI: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ParseError(f"Invalid amount returned by AI: {value!r}")
        value = int(value)
    if isinstance(value, int):
        if value < 0:
            raise ParseError(f"Invalid amount returned by AI: {value!r}")
        return str(value)

    text = CURRENCY_SUFFIX.sub("", str(value).strip()).strip()
    if THOUSANDS_GROUPED.fullmatch(text):
        text = AMOUNT_SEPARATORS.sub("", text)
    if not DIGITS.fullmatch(text):
        raise ParseError(f"Invalid amount returned by AI: {value!r}")
    return str(int(text))


def normalize_account_number(value: Any) -> Optional[str]:
    """Trả về số tài khoản 6-19 chữ số, None nếu không có hoặc không hợp lệ."""
    if value is None:
        return None
    text = re.sub(r"[\s\-.]", "", str(value))
    if text.lower() in NULL_MARKERS:
        return None
    if not ACCOUNT_NUMBER_PATTERN.fullmatch(text):
        print(f"⚠️ Bỏ qua số tài khoản không hợp lệ từ AI: {value!r}")
        return None
    return text


def to_transfer_info(data: Dict[str, Any]) -> ParsedTransferInfo:
    """
    Kiểm tra và chuẩn hóa object JSON từ AI.

    Raises:
        ParseError: Thiếu bank, accountName hoặc amount
    """
    missing = [field for field in REQUIRED_FIELDS if data.get(field) in (None, "")]
    if missing:
        raise ParseError(f"Invalid parsed data: missing required fields ({', '.join(missing)})")

    account_name = str(data["accountName"]).strip().upper() or UNKNOWN_ACCOUNT_NAME
    message = data.get("message")

    return ParsedTransferInfo(
        bank=str(data["bank"]).strip().lower(),
        account_name=account_name,
        amount=normalize_amount(data["amount"]),
        account_number=normalize_account_number(data.get("accountNumber")),
        message=str(message) if message else "",
    )


class GeminiTextParser:
    """
    Phân tích câu chuyển khoản tiếng Việt bằng Gemini.

    Attributes:
        client (GeminiClient): Client gọi Gemini
        prompt_builder (PromptBuilder): Bộ tạo prompt từ template
    """

    def __init__(self, client: GeminiClient, prompt_builder: Optional[PromptBuilder] = None):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    async def parse(self, text: str, banks: Sequence[Bank]) -> ParsedTransferInfo:
        """
        Gửi prompt kèm danh sách ngân hàng đến Gemini và chuẩn hóa kết quả.

        Args:
            text (str): Câu nhập tự do, ví dụ "vpbank NGUYEN VAN A 250k tai so 123456789"
            banks (Sequence[Bank]): Danh sách ngân hàng để AI đối chiếu

        Returns:
            ParsedTransferInfo: Thông tin đã chuẩn hóa

        Raises:
            ParseError: Gọi AI thất bại hoặc kết quả không hợp lệ
        """
        prompt = self.prompt_builder.build(text, BankDirectory.format_for_prompt(banks))

        print("🤖 Đang phân tích nội dung bằng Gemini AI...")
        try:
            raw_text = await self.client.generate_text(prompt)
        except Exception as e:
            print(f"❌ Lỗi khi gọi Gemini: {e}")
            raise ParseError("Failed to parse bank transfer information with AI") from e

        info = to_transfer_info(extract_json_object(raw_text))
        print(f"✅ Kết quả phân tích: bank={info.bank}, amount={info.amount}, "
              f"account_number={'có' if info.account_number else 'không'}")
        return info
