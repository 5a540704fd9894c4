"""Template file enumeration and plain/marked partitioning."""
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import FrozenSet, Iterable, List, Tuple

DEFAULT_MARKER = "_"


@dataclass(frozen=True)
class TemplateFile:
    """A file inside a template, addressed relative to the template root.

    Attributes:
        relative_path: POSIX path relative to the template root
        marker: Marker character used to flag files for substitution
    """

    relative_path: str
    marker: str = DEFAULT_MARKER

    @property
    def name(self) -> str:
        return PurePosixPath(self.relative_path).name

    @property
    def is_marked(self) -> bool:
        """True when the filename contains the marker character."""
        return self.marker in self.name

    @property
    def rendered_name(self) -> str:
        """Filename with every marker character removed."""
        rendered = self.name.replace(self.marker, "")
        if not rendered:
            raise ValueError(
                f"Template file '{self.relative_path}' has no name left after "
                f"removing marker '{self.marker}'"
            )
        return rendered

    @property
    def rendered_relative_path(self) -> str:
        """Destination path: same directory, marker stripped from the filename."""
        if not self.is_marked:
            return self.relative_path
        parent = PurePosixPath(self.relative_path).parent
        return str(parent / self.rendered_name)


def list_files(template_root: Path, marker: str = DEFAULT_MARKER) -> List[TemplateFile]:
    """List every file under template_root, sorted by relative path.

    Args:
        template_root: Template directory
        marker: Marker character recorded on each TemplateFile

    Returns:
        TemplateFile entries in deterministic order

    Raises:
        FileNotFoundError: If template_root is not a directory
    """
    root = Path(template_root)
    if not root.is_dir():
        raise FileNotFoundError(f"Template directory not found: {root}")

    paths = sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
    return [TemplateFile(path, marker) for path in paths]


def partition(
    files: Iterable[TemplateFile],
) -> Tuple[FrozenSet[TemplateFile], FrozenSet[TemplateFile]]:
    """Split files into (plain, marked) sets.

    Plain files are copied verbatim; marked files are renamed and rendered.
    """
    plain = set()
    marked = set()
    for template_file in files:
        if template_file.is_marked:
            marked.add(template_file)
        else:
            plain.add(template_file)
    return frozenset(plain), frozenset(marked)
