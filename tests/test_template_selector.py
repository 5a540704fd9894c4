"""Tests for template file listing and partitioning."""
import pytest

from kangapp.core.template_selector import TemplateFile, list_files, partition


class TestTemplateFile:
    """Test marker detection and rendered names."""

    def test_marked_file(self):
        """Underscore in the filename marks the file."""
        f = TemplateFile("src/app/_layout.tsx")
        assert f.is_marked is True
        assert f.rendered_name == "layout.tsx"
        assert f.rendered_relative_path == "src/app/layout.tsx"

    def test_plain_file(self):
        """Files without the marker keep their path."""
        f = TemplateFile("src/app/page.tsx")
        assert f.is_marked is False
        assert f.rendered_relative_path == "src/app/page.tsx"

    def test_marker_in_directory_only_is_plain(self):
        """Only the final path segment decides."""
        f = TemplateFile("my_dir/page.tsx")
        assert f.is_marked is False

    def test_all_markers_removed(self):
        """Every marker character is stripped, not just the first."""
        f = TemplateFile("_my_file_.ts")
        assert f.rendered_name == "myfile.ts"

    def test_top_level_marked_file(self):
        """Top-level files render without a leading directory."""
        assert TemplateFile("_package.json").rendered_relative_path == "package.json"

    def test_name_made_of_markers_rejected(self):
        """A filename that disappears after marker removal is an error."""
        with pytest.raises(ValueError, match="no name left"):
            TemplateFile("src/__").rendered_name

    def test_custom_marker(self):
        """A different marker character can be configured."""
        f = TemplateFile("src/@layout.tsx", marker="@")
        assert f.is_marked is True
        assert f.rendered_relative_path == "src/layout.tsx"


class TestListFiles:
    """Test recursive template enumeration."""

    def test_lists_files_sorted(self, templates_dir):
        """Files are listed recursively in path order, dotfiles included."""
        files = list_files(templates_dir / "projects" / "next-ts")
        paths = [f.relative_path for f in files]

        assert paths == sorted(paths)
        assert paths == [
            ".gitignore",
            "_package.json",
            "src/app/_layout.tsx",
            "src/app/page.tsx",
            "tsconfig.json",
        ]

    def test_directories_not_listed(self, templates_dir):
        """Only files are returned."""
        files = list_files(templates_dir / "projects" / "next-ts")
        assert "src" not in [f.relative_path for f in files]
        assert "src/app" not in [f.relative_path for f in files]

    def test_missing_root(self, tmp_path):
        """A missing template root is reported."""
        with pytest.raises(FileNotFoundError):
            list_files(tmp_path / "nope")


class TestPartition:
    """Test plain/marked partitioning."""

    def test_partition(self, templates_dir):
        """Marked files are separated from plain files."""
        files = list_files(templates_dir / "projects" / "next-ts")
        plain, marked = partition(files)

        assert {f.relative_path for f in marked} == {"_package.json", "src/app/_layout.tsx"}
        assert {f.relative_path for f in plain} == {
            ".gitignore",
            "src/app/page.tsx",
            "tsconfig.json",
        }

    def test_partition_disjoint_and_complete(self, templates_dir):
        """The two sets are disjoint and cover the input."""
        files = list_files(templates_dir / "projects" / "next-ts")
        plain, marked = partition(files)

        assert plain.isdisjoint(marked)
        assert plain | marked == set(files)

    def test_partition_empty(self):
        """No files yields two empty sets."""
        assert partition([]) == (frozenset(), frozenset())
