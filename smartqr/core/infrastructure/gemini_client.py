import asyncio
from typing import Optional

import google.generativeai as genai


class GeminiClient:
    """
    Wrapper mỏng quanh Gemini SDK để sinh văn bản từ một prompt.

    SDK chỉ được cấu hình ở lần gọi đầu tiên, nên ứng dụng vẫn khởi động
    được khi chưa có GEMINI_API_KEY (request sẽ bị chặn bởi ConfigError).

    Attributes:
        model_name (str): Tên model, ví dụ "gemini-2.5-pro"
        temperature (float): Nhiệt độ sinh văn bản
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-pro", temperature: float = 0.1):
        self._api_key = api_key
        self.model_name = _normalize_model_name(model_name)
        self.temperature = temperature
        self._model: Optional[genai.GenerativeModel] = None

    def _get_model(self) -> genai.GenerativeModel:
        if self._model is None:
            if not self._api_key:
                raise ValueError("GEMINI_API_KEY is required")
            if not self.model_name:
                raise ValueError("Gemini model name is required")
            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def generate_text(self, prompt: str) -> str:
        """
        Gửi prompt đến Gemini và trả về văn bản thô.

        SDK là blocking nên lời gọi chạy trong worker thread.
        """
        model = self._get_model()
        response = await asyncio.to_thread(
            model.generate_content,
            prompt,
            generation_config={"temperature": self.temperature},
        )
        text: Optional[str] = getattr(response, "text", None)
        return (text or "").strip()


def _normalize_model_name(name: Optional[str]) -> str:
    # "models/gemini-2.5-pro" -> "gemini-2.5-pro"
    if not name:
        return ""
    cleaned = name.strip()
    if cleaned.startswith("models/"):
        return cleaned.split("/", 1)[1]
    return cleaned
