from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from mr_comment._engine.console import console, info
from mr_comment._types.model import GenerationRequest
from .client import LLMClient


def generate_mr_comment(client: LLMClient, request: GenerationRequest) -> str:
    """
    Send the request through client while a spinner runs on stderr.

    Errors from the client propagate unchanged; there is no retry.
    """
    info(
        f"Sending request to [highlight]{request.provider}[/highlight] "
        f"([dim]{request.model}[/dim] at [dim]{request.endpoint}[/dim])"
    )

    with Progress(
        SpinnerColumn(),
        TextColumn(f"[bold blue]Generating MR comment ({request.model})..."),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("", total=None)
        comment = client.generate(request.system_prompt, request.user_message)

    info(f"Received {len(comment)} characters")
    return comment.strip()
