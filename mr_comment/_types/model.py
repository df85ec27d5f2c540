from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Optional


ProviderName = Literal["openai", "claude"]


# --- Diff Models ---


class FileChangeRecord(BaseModel):
    path: str
    status: Literal["added", "deleted", "modified"]


class NormalizedDiff(BaseModel):
    """Diff text with binary noise removed and added/deleted bodies elided."""

    content: str
    files: List[FileChangeRecord] = []

    @property
    def new_files(self) -> List[str]:
        return [f.path for f in self.files if f.status == "added"]

    @property
    def deleted_files(self) -> List[str]:
        return [f.path for f in self.files if f.status == "deleted"]


class TruncatedDiff(BaseModel):
    content: str
    original_line_count: int
    max_lines: int

    @property
    def was_truncated(self) -> bool:
        return self.original_line_count > self.max_lines

    @property
    def kept_line_count(self) -> int:
        """Diff lines surviving around the marker; odd max_lines rounds down."""
        if not self.was_truncated:
            return self.original_line_count
        return 2 * (max(self.max_lines, 0) // 2)


# --- Configuration Models ---


class FileConfig(BaseModel):
    """Contents of the persisted JSON config file. Every key is optional."""

    model_config = ConfigDict(extra="ignore")

    openai_api_key: Optional[str] = None
    claude_api_key: Optional[str] = None
    openai_endpoint: Optional[str] = None
    claude_endpoint: Optional[str] = None
    openai_model: Optional[str] = None
    claude_model: Optional[str] = None
    provider: Optional[ProviderName] = None


class Settings(BaseModel):
    provider: ProviderName
    api_key: Optional[str]
    endpoint: str
    model: str
    max_lines: int


# --- Request / Response Models ---


class GenerationRequest(BaseModel):
    provider: ProviderName
    model: str
    endpoint: str
    system_prompt: str
    user_message: str


class OpenAIMessage(BaseModel):
    content: Optional[str] = None


class OpenAIChoice(BaseModel):
    message: OpenAIMessage


class OpenAIResponse(BaseModel):
    choices: List[OpenAIChoice]


class ClaudeContent(BaseModel):
    type: str
    text: Optional[str] = None


class ClaudeResponse(BaseModel):
    content: List[ClaudeContent]
