from mr_comment._data.prompt import SYSTEM_PROMPT
from mr_comment._types.model import GenerationRequest, Settings, TruncatedDiff


def build_user_message(diff: TruncatedDiff) -> str:
    """Wrap the diff in the user message, noting when lines were dropped."""
    warning = (
        f" (truncated from {diff.original_line_count} lines)" if diff.was_truncated else ""
    )
    return f"Git diff{warning}:\n\n{diff.content}"


def build_request(settings: Settings, diff: TruncatedDiff) -> GenerationRequest:
    return GenerationRequest(
        provider=settings.provider,
        model=settings.model,
        endpoint=settings.endpoint,
        system_prompt=SYSTEM_PROMPT,
        user_message=build_user_message(diff),
    )
