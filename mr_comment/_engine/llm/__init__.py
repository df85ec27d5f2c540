from .analysis import generate_mr_comment
from .client import ClaudeClient, LLMClient, OpenAIClient, create_client
from .prompt import build_request, build_user_message

__all__ = [
    "ClaudeClient",
    "LLMClient",
    "OpenAIClient",
    "build_request",
    "build_user_message",
    "create_client",
    "generate_mr_comment",
]
