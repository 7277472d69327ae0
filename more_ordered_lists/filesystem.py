"""Filesystem helpers for the more-ordered-lists command line."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, TEXT_EXTENSIONS

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "MORE_ORDERED_LISTS_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "MORE_ORDERED_LISTS_MAX_LINE_LENGTH"


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}.")
    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum file size, honoring `MORE_ORDERED_LISTS_MAX_FILE_SIZE`.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum line length, honoring `MORE_ORDERED_LISTS_MAX_LINE_LENGTH`.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def contains_symlink(path: Path) -> bool:
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate a text file path under a base directory.

    Args:
        raw_path: User-supplied path (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, has an
            extension other than Markdown or plain text, or traverses a
            symlink.

    Examples:
        normalize_filepath("notes/outline.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in TEXT_EXTENSIONS:
        error_message = f"{resolved} is not a Markdown or text file.\n"
        error_message += f"Supported extensions are: {', '.join(TEXT_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file without following symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path) -> None:
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
) -> None:
    """Refuse to continue when a file changed between two stat snapshots.

    Raises:
        IOError: If inode, device, size, or modification time differ.
    """

    def fingerprint(stat_result: os.stat_result) -> tuple:
        return (
            getattr(stat_result, "st_ino", None),
            getattr(stat_result, "st_dev", None),
            stat_result.st_size,
            stat_result.st_mtime_ns,
        )

    if fingerprint(expected_stat) != fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading as UTF-8.

    Newlines are not translated, so ``\\r\\n`` endings survive a rewrite.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("outline.md")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")) :]


def apply_to_file_lines(full_file: Sequence[str], rewrites: Sequence[tuple[int, str]]) -> list[str]:
    """Apply ``(line_number, text)`` rewrites to lines that keep their endings.

    Each rewritten line keeps the line ending of the line it replaces.

    Examples:
        apply_to_file_lines(["A. x\\n", "A. y\\n"], [(1, "B. y")])  # ["A. x\\n", "B. y\\n"]
    """
    result = list(full_file)
    for line_number, text in rewrites:
        result[line_number] = text + _line_ending(result[line_number])
    return result


def rewrite_file(
    full_file: list[str],
    filepath: Path,
    rewrites: Sequence[tuple[int, str]],
    expected_stat: os.stat_result,
    initial_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
) -> None:
    """Atomically rewrite the lines of a file that changed.

    The new content goes to a temporary file in the same directory, which then
    replaces the original. Permissions, ownership (when allowed) and access
    time are preserved.

    Args:
        full_file: Original file content split into lines with their endings.
        filepath: Path to the file to update.
        rewrites: ``(line_number, new_text)`` pairs without line endings.
        expected_stat: File stat captured after parsing, used to detect races.
        initial_stat: File stat captured before parsing, used to preserve
            access time.
        warn: Optional callback for non-fatal warnings.

    Returns:
        None.

    Raises:
        IOError: If the file changes between parsing and writing or cannot be
            replaced.

    Examples:
        rewrite_file(full_file, Path("outline.md"), rewrites, post_stat, pre_stat)
    """
    current_stat = collect_file_stat(filepath)
    ensure_file_unchanged(expected_stat, current_stat, filepath)

    permissions = stat.S_IMODE(expected_stat.st_mode)
    uid = getattr(expected_stat, "st_uid", None)
    gid = getattr(expected_stat, "st_gid", None)
    atime_ns = initial_stat.st_atime_ns

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.writelines(apply_to_file_lines(full_file, rewrites))

            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

            if uid is not None and gid is not None and hasattr(os, "chown"):
                try:
                    os.chown(tmp_file.name, uid, gid)
                except PermissionError:
                    if warn is not None:
                        warn(
                            f"Warning: Could not preserve file ownership for {filepath.name} "
                            "(requires elevated privileges)"
                        )

        os.replace(temp_path, filepath)
        logger.debug("Rewrote %d line(s) in %s", len(rewrites), filepath)

        # mtime reflects the rewrite; only atime is restored
        current_stat = filepath.stat()
        os.utime(filepath, ns=(atime_ns, current_stat.st_mtime_ns))
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
