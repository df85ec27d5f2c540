# Standard Library Imports
import sys
import os
import argparse
from pathlib import Path
from typing import List, Optional

# Third-Party Library Imports
from rich.markup import escape
from rich.panel import Panel

# Internal Module Imports
from mr_comment import __version__
from mr_comment._data.providers import CONTEXT_LIMITS, DEFAULT_MAX_LINES, PROVIDERS
from mr_comment._engine.config import load_config, resolve_settings, save_config, update_config
from mr_comment._engine.console import console, info, set_verbose
from mr_comment._engine.diff import normalize_diff, split_lines, truncate_diff
from mr_comment._engine.git import get_diff_from_git, read_diff_file
from mr_comment._engine.llm import build_request, create_client, generate_mr_comment
from mr_comment._engine.output import print_token_estimate, write_result
from mr_comment._types.errors import MrCommentError

EPILOG = """\
Examples:
  # Generate comment using Claude (default)
  mr-comment --api-key YOUR_API_KEY

  # Generate comment using OpenAI
  mr-comment --provider openai --api-key YOUR_OPENAI_KEY

  # Generate comment for a specific commit or a range
  mr-comment --commit a1b2c3d
  mr-comment --commit "HEAD~3..HEAD"

  # Read diff from file, write the comment to a file
  mr-comment --file path/to/diff.txt --output mr-comment.md

  # Remember OpenAI as the default provider along with its key
  mr-comment --provider openai --api-key YOUR_OPENAI_KEY --save-config
"""


def _max_lines(value: str) -> int:
    number = int(value)
    if number < 2:
        raise argparse.ArgumentTypeError("must be at least 2")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mr-comment",
        description="Generate professional GitLab MR comments from git diffs using AI",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-c",
        "--commit",
        help='Commit or range to generate comment for (e.g. "HEAD" or "HEAD~3..HEAD"). '
        "Defaults to uncommitted changes.",
        type=str,
    )
    source.add_argument(
        "-f",
        "--file",
        help="Read diff from file instead of running git.",
        type=str,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write output to file instead of stdout.",
        type=str,
    )
    parser.add_argument(
        "-k",
        "--api-key",
        help="API key (can also use OPENAI_API_KEY or ANTHROPIC_API_KEY env var).",
        type=str,
    )
    parser.add_argument(
        "-p",
        "--provider",
        choices=PROVIDERS,
        help="API provider to use. Default: the config file's provider, else claude.",
    )
    parser.add_argument(
        "-e",
        "--endpoint",
        help="API endpoint (defaults based on provider).",
        type=str,
    )
    parser.add_argument(
        "-m",
        "--model",
        help="Model to use (defaults based on provider).",
        type=str,
    )
    parser.add_argument(
        "--max-lines",
        type=_max_lines,
        default=DEFAULT_MAX_LINES,
        help="Keep at most this many diff lines, split between head and tail. Default: %(default)s",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Estimate token usage and exit without calling the API.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the comment to stdout without decorative framing.",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path of the JSON config file. Default: ~/.mr-comment",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save --provider, --api-key, --endpoint and --model to the config file and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress details on stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def run(args: argparse.Namespace) -> None:
    config_path = Path(args.config).expanduser() if args.config else None

    # --- 1. Configuration ---
    file_config = load_config(config_path)
    settings = resolve_settings(
        file_config,
        os.environ,
        provider=args.provider,
        api_key=args.api_key,
        endpoint=args.endpoint,
        model=args.model,
        max_lines=args.max_lines,
    )

    if args.save_config:
        updated = update_config(
            file_config,
            settings.provider,
            api_key=args.api_key,
            endpoint=args.endpoint,
            model=args.model,
        )
        saved_to = save_config(updated, config_path)
        console.print(
            f"[success]✔ Settings for '[cyan]{settings.provider}[/cyan]' saved to [dim]{saved_to}[/dim][/success]"
        )
        return

    info(f"Using provider [highlight]{settings.provider}[/highlight] with model [highlight]{settings.model}[/highlight]")

    # --- 2. Diff Acquisition ---
    if args.file:
        raw_diff = read_diff_file(args.file)
    else:
        raw_diff = get_diff_from_git(args.commit)

    # --- 3. Normalize & Truncate ---
    normalized = normalize_diff(raw_diff)
    info(
        f"Normalized diff: {len(split_lines(normalized.content))} lines, "
        f"{len(normalized.new_files)} new file(s), {len(normalized.deleted_files)} deleted file(s)"
    )
    truncated = truncate_diff(normalized.content, settings.max_lines)
    if truncated.was_truncated:
        console.print(
            f"[warning]Diff truncated from {truncated.original_line_count} to {truncated.kept_line_count} lines[/warning]"
        )

    request = build_request(settings, truncated)

    # --- 4. Debug: token estimate only ---
    if args.debug:
        print_token_estimate(request, truncated, CONTEXT_LIMITS[settings.provider])
        return

    # --- 5. Generate & Output ---
    client = create_client(settings)
    comment = generate_mr_comment(client, request)
    write_result(comment, output_path=args.output, plain=args.plain)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the mr-comment command.

    Returns the process exit code: 0 on success, 1 on any reported error,
    130 when interrupted.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    try:
        run(args)
    except KeyboardInterrupt:
        console.print("\n[bold yellow]✋ Operation cancelled by user.[/bold yellow]")
        return 130
    except MrCommentError as e:
        console.print(
            Panel(
                f"[yellow]{escape(str(e))}[/yellow]",
                title=f"[bold red]{type(e).__name__}[/bold red]",
                border_style="red",
            )
        )
        return 1

    return 0


# --- Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
