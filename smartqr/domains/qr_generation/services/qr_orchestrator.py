from typing import Optional

from smartqr.core.config.settings import Settings
from smartqr.core.exceptions import ValidationError
from smartqr.core.infrastructure.vietqr_client import VietQRClient
from smartqr.core.utils.helpers import format_currency
from smartqr.domains.banking.models import Bank
from smartqr.domains.banking.services.bank_directory import BankDirectory
from smartqr.domains.parsing.models import ParsedTransferInfo
from smartqr.domains.parsing.services.text_parser import TextUnderstanding
from smartqr.domains.qr_generation.models import (
    BankInfoSummary,
    QRFormat,
    QRGenerationRequest,
    QRGenerationResult,
)
from smartqr.domains.qr_generation.services.account_name_resolver import AccountNameResolver


class QROrchestrator:
    """
    Bộ xử lý chính: từ câu nhập tự do đến mã VietQR.

    Quy trình tuần tự, mỗi bước chỉ chạy một lần:
    1. Lấy danh sách ngân hàng (lỗi -> DirectoryFetchError)
    2. Phân tích câu nhập bằng AI (lỗi -> ParseError)
    3. Xác định số tài khoản (thiếu -> ValidationError)
    4. Tìm ngân hàng (không thấy -> ValidationError)
    5. Xác định tên chủ tài khoản (không bao giờ lỗi)
    6. Tạo request QR
    7. Gọi VietQR /generate (lỗi -> UpstreamError)

    Attributes:
        directory (BankDirectory): Danh bạ ngân hàng có cache
        parser (TextUnderstanding): Bộ phân tích văn bản
        resolver (AccountNameResolver): Bộ xác định tên chủ tài khoản
        client (VietQRClient): Client VietQR để tạo QR
        settings (Settings): Cấu hình, dùng để kiểm tra credentials
    """

    def __init__(self, directory: BankDirectory, parser: TextUnderstanding,
                 resolver: AccountNameResolver, client: VietQRClient, settings: Settings):
        self.directory = directory
        self.parser = parser
        self.resolver = resolver
        self.client = client
        self.settings = settings

    @staticmethod
    def build_qr_request(parsed: ParsedTransferInfo, bank: Bank, account_number: str,
                         account_name: str, qr_format: QRFormat = QRFormat.COMPACT) -> QRGenerationRequest:
        """
        Tạo request QR; số tiền "0" nghĩa là không chỉ định nên bị bỏ khỏi request.
        """
        return QRGenerationRequest(
            account_no=account_number,
            account_name=account_name,
            acq_id=bank.bin,
            add_info=parsed.message or "",
            amount=int(parsed.amount) if parsed.has_amount else None,
            format=qr_format,
        )

    async def prepare(self, input_text: str,
                      explicit_account_number: Optional[str] = None) -> tuple:
        """
        Chạy bước 1-6 của pipeline, chưa gọi VietQR /generate.

        Returns:
            tuple: (parsed, bank, QRGenerationRequest)
        """
        self.settings.validate_credentials()

        # Bước 1: Lấy danh sách ngân hàng
        banks = await self.directory.get_banks()
        print(f"🏦 Có {len(banks)} ngân hàng được hỗ trợ")

        # Bước 2: Phân tích câu nhập
        parsed = await self.parser.parse(input_text, banks)

        # Bước 3: Số tài khoản trong câu nhập được ưu tiên hơn tham số riêng
        account_number = parsed.account_number or (explicit_account_number or "").strip() or None
        if not account_number:
            raise ValidationError(
                "Account number is required. Please provide it in the input text or as a separate field."
            )

        # Bước 4: Tìm ngân hàng
        bank = self.directory.match_bank(banks, parsed.bank)
        if bank is None:
            raise ValidationError(f'Bank "{parsed.bank}" not found in VietQR supported banks')
        print(f"✅ Tìm thấy ngân hàng: {bank.short_name} (BIN: {bank.bin})")

        # Bước 5: Tên chủ tài khoản
        account_name = await self.resolver.resolve(bank.bin, account_number, parsed.account_name)

        # Bước 6: Tạo request QR
        qr_format = QRFormat(self.settings.VIETQR_QR_FORMAT)
        qr_request = self.build_qr_request(parsed, bank, account_number, account_name, qr_format)
        return parsed, bank, qr_request

    async def generate(self, input_text: str,
                       explicit_account_number: Optional[str] = None) -> QRGenerationResult:
        """
        Tạo mã VietQR từ câu nhập tự do.

        Args:
            input_text (str): Câu nhập, ví dụ "vpbank NGUYEN TRUONG GIANG 250k tai so 1234567890"
            explicit_account_number (Optional[str]): Số tài khoản nhập riêng

        Returns:
            QRGenerationResult: Ảnh QR (data URL) và thông tin hiển thị

        Raises:
            ConfigError, DirectoryFetchError, ParseError, ValidationError, UpstreamError
        """
        parsed, bank, qr_request = await self.prepare(input_text, explicit_account_number)

        print("🏦 Tạo VietQR với thông tin:")
        print(f"   - Ngân hàng: {bank.short_name}")
        print(f"   - Tên người nhận: {qr_request.account_name}")
        print(f"   - Số tiền: {format_currency(qr_request.amount) if qr_request.amount else 'không chỉ định'}")
        print(f"   - Nội dung: {qr_request.add_info}")

        # Bước 7: Gọi VietQR
        qr_data = await self.client.generate(qr_request.to_payload())

        return QRGenerationResult(
            qr_data_url=qr_data["qrDataURL"],
            qr_code=qr_data.get("qrCode"),
            bank_info=BankInfoSummary(
                bank_name=bank.name,
                bank_code=bank.code,
                account_name=qr_request.account_name,
                amount=parsed.amount,
                message=parsed.message or "",
            ),
        )
