from pathlib import Path
from typing import Optional

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
DEFAULT_TEMPLATE_PATH = PROMPTS_DIR / "bank_transfer_parser.txt"


def load_prompt(prompt_path: Path) -> str:
    """Đọc file prompt dạng UTF-8 và bỏ BOM nếu có."""
    return prompt_path.read_text(encoding="utf-8").lstrip("\ufeff")


class PromptBuilder:
    """
    Tạo prompt phân tích chuyển khoản từ template đóng gói trong package.

    Template chứa vai trò hệ thống, hướng dẫn trích xuất, định dạng JSON đầu ra,
    các quy tắc và ví dụ few-shot; chỉ có 2 biến {input_text} và {banks_list}.
    """

    def __init__(self, template_path: Path = DEFAULT_TEMPLATE_PATH):
        self.template_path = template_path
        self._template: Optional[str] = None

    @property
    def template(self) -> str:
        if self._template is None:
            print(f"📄 Đang tải prompt template: {self.template_path.name}")
            self._template = load_prompt(self.template_path)
        return self._template

    def build(self, input_text: str, banks_list: str) -> str:
        return self.template.format(input_text=input_text, banks_list=banks_list)
