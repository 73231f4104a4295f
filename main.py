# Standard Library Imports
import os
import sys
import argparse
from typing import List, Optional, Tuple

# Third-Party Library Imports
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

# Internal Module Imports
from _engine.claude import generate_title_description
from _engine.debug import DebugPrinter, custom_theme, enable_http_trace, err_console
from _engine.storage import (
    file_exists,
    read_text,
    read_api_key,
    resolve_default_path,
    save_results,
)
from _types.errors import (
    CommitAIError,
    ConfigError,
    HttpStatusError,
    InputError,
)
from _types.model import CompletionResult

PROGRAM_NAME = "git-commit-ai"

# --- Initialize Rich Console ---
# Results go to stdout, everything else to stderr
console = Console(theme=custom_theme)


# --- Argument Parsing ---


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line front end."""
    epilog = (
        "Examples:\n"
        f'  {PROGRAM_NAME} "$(git diff)"                         # Use defaults\n'
        f'  {PROGRAM_NAME} -k custom_key.txt "$(git diff)"       # Custom API key\n'
        f'  {PROGRAM_NAME} -p my_profile.txt "$(git diff)"       # Custom profile\n'
        f"  {PROGRAM_NAME} -d changes.diff                      # Read diff from file\n"
        f'  {PROGRAM_NAME} -o commit_message.md "$(git diff)"    # Save to file\n'
    )
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Claude API Client for Git Diff Analysis\n"
        "Sends your profile and a git diff to Claude and prints a title and description.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-k",
        "--key-file",
        help="Path to file containing the API key (default: ~/.config/claude/api_key.txt)",
        type=str,
    )
    parser.add_argument(
        "-p",
        "--profile",
        help="Path to profile file (default: ~/.config/claude/profile.txt)",
        type=str,
    )
    parser.add_argument(
        "-d",
        "--diff-file",
        help="Read git diff from a file instead of the command line",
        type=str,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Save results to the specified file",
        type=str,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose/debug output",
    )
    parser.add_argument(
        "git_diff",
        nargs="?",
        help="The git diff to describe (ignored when -d is given)",
    )
    return parser


# --- Input Loading ---


def load_inputs(args: argparse.Namespace, debug: DebugPrinter) -> Tuple[str, str, str]:
    """
    Resolve and read the API key, profile and diff named by the arguments.

    Checks run in a fixed order so the first missing piece is the one reported.

    Returns:
        Tuple[str, str, str]: (api_key, profile, diff)
    """
    key_file_path = args.key_file
    if key_file_path is None:
        key_file_path = resolve_default_path("api_key")
        debug(f"Using default API key from: {key_file_path}")
    if not file_exists(key_file_path):
        raise ConfigError(
            f"API key file not found at {key_file_path}\n"
            "Create it first or specify a key file with -k option"
        )

    profile_path = args.profile
    if profile_path is None:
        profile_path = resolve_default_path("profile")
        debug(f"Using default profile from: {profile_path}")
    if not file_exists(profile_path):
        raise ConfigError(
            f"Profile file not found at {profile_path}\n"
            "Create it first or specify a profile with -p option"
        )

    if args.diff_file is None and args.git_diff is None:
        raise InputError(
            "Git diff is required (either as an argument or via -d option)"
        )

    api_key = read_api_key(key_file_path, debug=debug)
    profile = read_text(profile_path, error_cls=ConfigError, debug=debug)
    if args.diff_file is not None:
        diff = read_text(args.diff_file, error_cls=InputError, debug=debug)
    else:
        # argv holds undecodable bytes as lone surrogates; replace them like read_text does
        diff = os.fsencode(args.git_diff).decode("utf-8", errors="replace")
    return api_key, profile, diff


# --- Output ---


def print_result(result: CompletionResult) -> None:
    # out() skips markup, emoji and wrapping so the text is printed as received
    console.out(
        f"TITLE: {result.title}\n\nDESCRIPTION:\n{result.description}",
        highlight=False,
    )


def print_error(error: CommitAIError) -> None:
    """Show a failure on the diagnostic stream, naming the step that failed."""
    body = Text(error.message)
    if isinstance(error, HttpStatusError):
        body.append(f"\nResponse: {error.body}")
    err_console.print(
        Panel(
            body,
            title=f"[bold red]Error ({error.step})[/bold red]",
            border_style="red",
        )
    )


# --- Main Application Logic ---


def run(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, run the request pipeline and report the outcome.

    Returns:
        int: Process exit status, 0 on success and 1 on any failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = DebugPrinter(args.verbose)
    debug("Debug mode enabled")
    if debug.enabled:
        enable_http_trace()

    try:
        api_key, profile, diff = load_inputs(args, debug)

        console.out("Sending request to Anthropic API...", highlight=False)
        if debug.enabled:
            result = generate_title_description(api_key, profile, diff, debug=debug)
        else:
            with err_console.status("[bold blue]Waiting for Claude...", spinner="dots"):
                result = generate_title_description(api_key, profile, diff, debug=debug)

        print_result(result)

        if args.output:
            save_results(args.output, result)
            console.out(f"Results saved to: {args.output}", highlight=False)
    except CommitAIError as e:
        print_error(e)
        if isinstance(e, InputError) and args.diff_file is None and args.git_diff is None:
            parser.print_usage(sys.stderr)
        return 1

    return 0


def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        err_console.print("\n[bold yellow]Operation cancelled by user.[/bold yellow]")
        sys.exit(130)


# --- Entry Point ---
if __name__ == "__main__":
    main()
