from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from mr_comment._engine.console import console as status_console
from mr_comment._engine.diff import estimate_tokens
from mr_comment._types.errors import OutputError
from mr_comment._types.model import GenerationRequest, TruncatedDiff

# stdout console for results only
console = Console()


def write_result(text: str, output_path: Optional[str] = None, plain: bool = False) -> None:
    """
    Deliver the generated comment.

    With output_path the file is overwritten; otherwise the text goes to
    stdout, framed in a panel unless plain is set.
    """
    if output_path:
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise OutputError(f"Failed to write to file: {output_path} ({e.strerror or e})") from e
        status_console.print(f"[success]MR comment written to {output_path}[/success]")
        return

    if plain:
        print(text)
        return

    console.print(
        Panel(
            Markdown(text),
            title="[bold green]MR Comment",
            border_style="green",
        )
    )


def print_token_estimate(request: GenerationRequest, diff: TruncatedDiff, context_limit: int) -> None:
    """Show the --debug token breakdown for a request that would be sent."""
    system_tokens = estimate_tokens(request.system_prompt)
    diff_tokens = estimate_tokens(diff.content)

    table = Table(title="Token estimation")
    table.add_column("Part", style="cyan", justify="right")
    table.add_column("Tokens", style="magenta", justify="left")

    table.add_row("System prompt", f"{system_tokens:,}")
    table.add_row("Diff content", f"{diff_tokens:,} ({diff.original_line_count:,} lines)")
    table.add_row("Total estimate", f"{system_tokens + diff_tokens:,}", style="bold")
    table.add_row(f"{request.provider} limit", f"{context_limit:,}", style="dim")

    console.print(table)
