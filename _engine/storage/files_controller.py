import os
import tempfile
from pathlib import Path
from typing import Type

from _data.claude import DEFAULT_CONFIG_DIR, DEFAULT_FILES
from _engine.debug import DISABLED, DebugPrinter
from _types.errors import CommitAIError, ConfigError, InputError, OutputError
from _types.model import CompletionResult


def resolve_default_path(kind: str) -> str:
    """
    Resolve the default location of a config file under the home directory.

    Args:
        kind (str): "api_key" or "profile".

    Returns:
        str: e.g. "~/.config/claude/api_key.txt" with the home directory expanded.

    Raises:
        ValueError: For an unknown kind.
        ConfigError: If the home directory cannot be determined.
    """
    if kind not in DEFAULT_FILES:
        raise ValueError(f"Unknown config file kind: {kind!r}")
    try:
        home_dir = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError("Could not determine home directory") from e
    return str(home_dir / DEFAULT_CONFIG_DIR / DEFAULT_FILES[kind])


def file_exists(file_path: str) -> bool:
    return os.path.exists(file_path)


def read_text(
    file_path: str,
    error_cls: Type[CommitAIError] = InputError,
    debug: DebugPrinter = DISABLED,
) -> str:
    """
    Read a whole file as text, keeping line endings untouched.

    Args:
        file_path (str): File to read.
        error_cls: Error raised when the file cannot be read.
        debug (DebugPrinter): Diagnostic output toggle.

    Returns:
        str: File contents. Invalid UTF-8 is replaced rather than rejected.
    """
    try:
        # newline="" so the profile and diff reach the prompt byte for byte
        with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            debug(f"Opened file: {file_path}")
            content = f.read()
    except OSError as e:
        raise error_cls(f"Failed to open file: {file_path} ({e.strerror or e})") from e

    debug(f"File size: {len(content)} characters")
    return content


def read_api_key(file_path: str, debug: DebugPrinter = DISABLED) -> str:
    """Read the API key file and strip surrounding whitespace."""
    api_key = read_text(file_path, error_cls=ConfigError, debug=debug).strip(" \t\r\n")
    if not api_key:
        raise ConfigError(f"API key file is empty: {file_path}")
    debug(f"Successfully read API key (length: {len(api_key)})")
    return api_key


def save_results(file_path: str, result: CompletionResult) -> None:
    """
    Write "# {title}\\n\\n{description}" to file_path.

    The content goes to a temporary file in the same directory first and is
    renamed into place, so a failed write leaves no partial output behind.

    Raises:
        OutputError: If the file could not be written.
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=directory,
            prefix=".git-commit-ai-",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(result.to_markdown())
        # NamedTemporaryFile is created 0600; give the result the usual umask mode
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_path, 0o666 & ~umask)
        os.replace(tmp_path, file_path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise OutputError(
            f"Failed to open output file: {file_path} ({e.strerror or e})"
        ) from e
