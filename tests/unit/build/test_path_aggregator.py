"""Tests for merging module paths."""

import os
from pathlib import Path

import pytest

from docmerge.build.module_descriptor import Module
from docmerge.build.path_aggregator import ConflictError, PathAggregator


def make_module(name, classpath=(), namespace=None, snippets=(), root=None):
    root = Path(root or f"/src/{name}")
    return Module(
        name=name,
        source_root=root,
        source_directories=frozenset([root]),
        classpath_entries=tuple(Path(p) for p in classpath),
        module_namespace=namespace,
        snippet_directories=frozenset(Path(s) for s in snippets),
    )


class TestMergeSources:
    """Test source directory merging."""

    def test_union(self):
        """Test that sources are unioned."""
        modules = [make_module("a"), make_module("b")]
        assert PathAggregator.merge_sources(modules) == {Path("/src/a"), Path("/src/b")}

    def test_duplicates_collapse(self):
        """Test that shared source directories collapse."""
        modules = [make_module("a", root="/shared"), make_module("b", root="/shared")]
        assert PathAggregator.merge_sources(modules) == {Path("/shared")}

    def test_empty(self):
        assert PathAggregator.merge_sources([]) == frozenset()


class TestMergeClasspath:
    """Test classpath merging."""

    def test_first_occurrence_wins(self):
        """Test [A:[x,y], B:[y,z]] -> [x,y,z]."""
        modules = [make_module("A", ["x", "y"]), make_module("B", ["y", "z"])]
        assert PathAggregator.merge_classpath(modules) == [Path("x"), Path("y"), Path("z")]

    def test_module_order_matters(self):
        """Test that module order determines classpath order."""
        modules = [make_module("B", ["y", "z"]), make_module("A", ["x", "y"])]
        assert PathAggregator.merge_classpath(modules) == [Path("y"), Path("z"), Path("x")]

    def test_no_sorting(self):
        """Test that entries keep their declared order."""
        modules = [make_module("A", ["z.jar", "a.jar", "m.jar"])]
        assert PathAggregator.merge_classpath(modules) == [Path("z.jar"), Path("a.jar"), Path("m.jar")]


class TestModulePathMapping:
    """Test namespace to source root mapping."""

    def test_named_modules_only(self):
        """Test that unnamed modules are left out."""
        modules = [
            make_module("core", namespace="io.jenetics.base"),
            make_module("tools"),
            make_module("ext", namespace="io.jenetics.ext"),
        ]
        assert PathAggregator.build_module_path_mapping(modules) == {
            "io.jenetics.base": Path("/src/core"),
            "io.jenetics.ext": Path("/src/ext"),
        }

    def test_duplicate_namespace(self):
        """Test that a shared namespace raises ConflictError."""
        modules = [
            make_module("core", namespace="io.jenetics"),
            make_module("ext", namespace="io.jenetics"),
        ]
        with pytest.raises(ConflictError, match="io.jenetics"):
            PathAggregator.build_module_path_mapping(modules)

    def test_all_unnamed(self):
        assert PathAggregator.build_module_path_mapping([make_module("a")]) == {}


class TestJoinSnippetPaths:
    """Test snippet path joining."""

    def test_none_when_empty(self):
        """Test None (not an empty string) without snippets."""
        assert PathAggregator.join_snippet_paths([make_module("a"), make_module("b")]) is None

    def test_joined_with_pathsep(self):
        """Test union joined with the platform separator."""
        modules = [
            make_module("a", snippets=["/a/snippet-files"]),
            make_module("b", snippets=["/b/snippet-files", "/a/snippet-files"]),
        ]
        result = PathAggregator.join_snippet_paths(modules)
        assert result.split(os.pathsep) == [
            str(Path("/a/snippet-files")),
            str(Path("/b/snippet-files")),
        ]
