from .prompt_builder import PromptBuilder
from .text_parser import GeminiTextParser, TextUnderstanding

__all__ = [
    "PromptBuilder",
    "GeminiTextParser",
    "TextUnderstanding",
]
