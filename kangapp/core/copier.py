"""Glob-based file copy with negation patterns.

Patterns are resolved against a base directory:

    copy(["**/*", "!src/app/_layout.tsx"], dest, base_dir=template_root)

copies everything below ``template_root`` into ``dest`` except the
excluded file, keeping each file's path relative to the base directory.
"""
import shutil
from pathlib import Path
from typing import Iterable, List, Set, Union

from kangapp.core.logger import get_logger

logger = get_logger(__name__)


class CopyFailure(Exception):
    """Raised when template files cannot be copied or written."""

    def __init__(self, message: str, path: Union[Path, str, None] = None):
        self.path = path
        super().__init__(message)


def _relative_pattern(pattern: str, base_dir: Path) -> str:
    path = Path(pattern)
    if not path.is_absolute():
        return pattern
    try:
        return path.relative_to(base_dir).as_posix()
    except ValueError:
        raise ValueError(f"Pattern '{pattern}' is outside of {base_dir}") from None


def _expand(pattern: str, base_dir: Path) -> Set[Path]:
    return {p for p in base_dir.glob(pattern) if p.is_file()}


def resolve(source_globs: Iterable[str], base_dir: Path) -> List[Path]:
    """Resolve patterns to the sorted list of matching files under base_dir."""
    base_dir = Path(base_dir)
    included: Set[Path] = set()
    excluded: Set[Path] = set()

    for raw in source_globs:
        negated = raw.startswith("!")
        pattern = _relative_pattern(raw[1:] if negated else raw, base_dir)
        if not pattern:
            continue
        if negated:
            excluded |= _expand(pattern, base_dir)
        else:
            included |= _expand(pattern, base_dir)

    return sorted(included - excluded)


def copy(source_globs: Iterable[str], destination: Path, base_dir: Path) -> List[Path]:
    """Copy files matched by source_globs into destination.

    Args:
        source_globs: Glob patterns relative to base_dir; a leading ``!``
            excludes matches from the other patterns
        destination: Target directory (created as needed)
        base_dir: Directory the patterns are resolved against

    Returns:
        Destination paths written

    Raises:
        CopyFailure: If a file cannot be copied
    """
    base_dir = Path(base_dir)
    destination = Path(destination)
    written = []

    for source in resolve(source_globs, base_dir):
        target = destination / source.relative_to(base_dir)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        except OSError as e:
            raise CopyFailure(f"Failed to copy {source} to {target}: {e}", path=source) from e
        logger.debug(f"Copied {source} -> {target}")
        written.append(target)

    return written
