from rich.console import Console
from rich.theme import Theme

# Custom theme for consistent styling
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "highlight": "magenta",
    }
)

# Diagnostics go to stderr so stdout only ever carries the generated comment
console = Console(theme=custom_theme, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def info(message: str) -> None:
    """Print an informational message, only when running with --verbose."""
    if _verbose:
        console.print(f"[info]{message}[/info]")
