"""Tests for name derivation and glob exclusion."""

from pathlib import Path

import pytest

from docmerge.build.package_filter import PackageFilter
from docmerge.config import ConfigurationError


class TestDerivedNames:
    """Test fully-qualified name derivation."""

    def test_basic(self):
        """Test stripping the root and extension."""
        paths = [
            "jenetics/src/main/java/io/jenetics/Gene.java",
            "jenetics/src/main/java/io/jenetics/util/Seq.java",
        ]
        assert PackageFilter.derived_names(paths) == {"io.jenetics.Gene", "io.jenetics.util.Seq"}

    def test_module_descriptor_skipped(self):
        """Test that module-info.java produces no name."""
        paths = [
            Path("core/src/main/java/module-info.java"),
            Path("core/src/main/java/io/jenetics/Gene.java"),
        ]
        assert PackageFilter.derived_names(paths) == {"io.jenetics.Gene"}

    def test_without_marker(self):
        """Test that paths without the marker produce no name."""
        assert PackageFilter.derived_names(["src/io/Gene.java"]) == set()

    def test_package_segment_named_like_marker(self):
        """Test that a package segment equal to the marker is kept."""
        paths = [
            "lib/src/main/java/org/example/java/Foo.java",
            "jdk/src/main/java/java/util/List.java",
        ]
        assert PackageFilter.derived_names(paths) == {"org.example.java.Foo", "java.util.List"}

    def test_source_set_layout_preferred(self):
        """Test that the marker below src/<set> wins over an outer one."""
        paths = ["/home/java/project/src/main/java/io/Gene.java"]
        assert PackageFilter.derived_names(paths) == {"io.Gene"}

    def test_source_roots(self):
        """Test names relative to known source roots."""
        paths = [
            Path("/repo/base/java/org/example/java/Foo.java"),
            Path("/repo/tools/sources/org/tools/Tool.java"),
        ]
        roots = [Path("/repo/base/java"), Path("/repo/tools/sources")]
        assert PackageFilter.derived_names(paths, source_roots=roots) == {
            "org.example.java.Foo",
            "org.tools.Tool",
        }

    def test_innermost_source_root(self):
        """Test that the most specific root is used for nested roots."""
        paths = ["/repo/java/nested/java/io/Gene.java"]
        roots = ["/repo/java", "/repo/java/nested/java"]
        assert PackageFilter.derived_names(paths, source_roots=roots) == {"io.Gene"}

    def test_marker_fallback_outside_roots(self):
        """Test that paths outside every root fall back to the marker."""
        paths = ["other/src/main/java/io/Gene.java"]
        assert PackageFilter.derived_names(paths, source_roots=["/repo/base"]) == {"io.Gene"}

    def test_custom_marker(self):
        """Test a custom root marker."""
        paths = ["lib/kotlin/org/example/Util.kt"]
        assert PackageFilter.derived_names(paths, root_marker="kotlin") == {"org.example.Util"}

    def test_marker_is_a_segment(self):
        """Test that the marker must be a whole path segment."""
        assert PackageFilter.derived_names(["src/javax/Foo.java"]) == set()


class TestMatches:
    """Test glob matching against slash-joined names."""

    def test_star_in_segment(self):
        assert PackageFilter.matches("a/b/C", ["a/b/*"])
        assert PackageFilter.matches("a.b.C", ["a/b/*"])

    def test_star_does_not_cross_segments(self):
        assert not PackageFilter.matches("a.b.c.D", ["a/b/*"])

    def test_double_star(self):
        assert PackageFilter.matches("a.b.c.D", ["a/**"])
        assert PackageFilter.matches("io.jenetics.internal.util.Bits", ["**/internal/**"])
        assert PackageFilter.matches("Impl", ["**/Impl"])

    def test_dots_are_literal_in_patterns(self):
        """Test that dotted patterns do not match hierarchical names."""
        assert not PackageFilter.matches("io.jenetics.Gene", ["io.jenetics.*"])

    def test_question_mark_and_class(self):
        assert PackageFilter.matches("a.B1", ["a/B?"])
        assert PackageFilter.matches("a.B1", ["a/B[0-9]"])
        assert not PackageFilter.matches("a.Bx", ["a/B[!a-z]"])

    def test_regex_characters_are_literal(self):
        assert PackageFilter.matches("a.B$1", ["a/B$1"])
        assert not PackageFilter.matches("a.Bxx", ["a/B+"])

    def test_no_patterns(self):
        assert not PackageFilter.matches("a.b.C", [])

    def test_bracket_edge_cases(self):
        """Test brackets without a closing member, as fnmatch reads them."""
        # "[]" has no closing bracket and is literal
        assert not PackageFilter.matches("a.b.C", ["a[]b"])
        assert PackageFilter.matches("a[]b", ["a[]b"])
        # A leading "]" is a class member
        assert PackageFilter.matches("x.]", ["x/[]a]"])
        assert PackageFilter.matches("x.a", ["x/[]a]"])
        assert not PackageFilter.matches("x.]", ["x/[!]a]"])
        assert PackageFilter.matches("x.b", ["x/[!]a]"])

    def test_open_bracket_in_class(self):
        assert PackageFilter.matches("x.[", ["x/[[]"])

    def test_invalid_range(self):
        with pytest.raises(ConfigurationError, match="Invalid exclusion pattern"):
            PackageFilter.matches("a.b", ["a/[z-a]"])

    def test_check_patterns(self):
        PackageFilter.check_patterns(["**/internal/**", "a[]b"])
        with pytest.raises(ConfigurationError):
            PackageFilter.check_patterns(["io/**", "a/[z-a]"])


class TestComputeExclusions:
    """Test exclusion set computation."""

    def test_match(self):
        assert PackageFilter.compute_exclusions({"a/b/C"}, {"a/b/*"}) == {"a/b/C"}

    def test_no_match(self):
        assert PackageFilter.compute_exclusions({"a/b/C"}, {"x/*"}) == set()

    def test_subset(self):
        """Test that exclusions are always a subset of the names."""
        names = {"io.jenetics.Gene", "io.jenetics.internal.Bits", "io.jenetics.internal.util.Hash"}
        excluded = PackageFilter.compute_exclusions(names, ["io/jenetics/internal/**"])
        assert excluded == {"io.jenetics.internal.Bits", "io.jenetics.internal.util.Hash"}
        assert excluded <= names


class TestSourceFiles:
    """Test source file collection."""

    def test_collects_sorted(self, tmp_path):
        root = tmp_path / "src" / "main" / "java"
        (root / "b").mkdir(parents=True)
        (root / "a").mkdir()
        (root / "b" / "B.java").write_text("")
        (root / "a" / "A.java").write_text("")
        (root / "a" / "notes.txt").write_text("")

        files = PackageFilter.source_files([root, tmp_path / "missing"])
        assert files == [root / "a" / "A.java", root / "b" / "B.java"]

    def test_skips_snippet_and_resource_dirs(self, tmp_path):
        """Test that snippet-files and doc-files contents are not sources."""
        root = tmp_path / "java"
        (root / "io" / "snippet-files").mkdir(parents=True)
        (root / "io" / "doc-files").mkdir(parents=True)
        (root / "io" / "Gene.java").write_text("")
        (root / "io" / "snippet-files" / "Snippets.java").write_text("")
        (root / "io" / "doc-files" / "Example.java").write_text("")

        assert PackageFilter.source_files([root]) == [root / "io" / "Gene.java"]
