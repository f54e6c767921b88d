"""
Tests for ecosystem detection and the ecosystem-aware lock detector.

Tests cover:
- Manifest scan (root, nested, pruned dependency directories)
- Lock files excluded only for detected ecosystems
- Glob lock names (.NET)
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from contextpack.services.rules import EcosystemLockDetector, EcosystemRegistry, RuleKind
from contextpack.services.rules.ecosystem import detect_ecosystem


class TestDetectEcosystem:
    """Tests for manifest basename mapping."""

    @pytest.mark.parametrize(
        ("basename", "expected"),
        [
            ("package.json", "node"),
            ("go.mod", "go"),
            ("Cargo.toml", "rust"),
            ("pyproject.toml", "python"),
            ("Gemfile", "ruby"),
            ("App.csproj", "dotnet"),
            ("pom.xml", "java"),
            ("README.md", None),
        ],
    )
    def test_manifest_mapping(self, basename: str, expected: str | None) -> None:
        """Known manifests map to their ecosystem."""
        assert detect_ecosystem(basename) == expected


class TestEcosystemRegistryScan:
    """Tests for EcosystemRegistry.scan."""

    def test_root_manifest(self, make_tree: Callable[[dict], Path]) -> None:
        """A manifest at the root activates its ecosystem."""
        root = make_tree({"go.mod": "module example.com/x\n", "main.go": "package main\n"})

        registry = EcosystemRegistry.scan(root)

        assert registry.detected_ecosystems == frozenset({"go"})
        assert registry.evidence["go"] == "go.mod"

    def test_nested_manifest(self, make_tree: Callable[[dict], Path]) -> None:
        """Manifests in subdirectories (monorepos) are found too."""
        root = make_tree({"web/package.json": "{}", "api/go.mod": "module api\n"})

        registry = EcosystemRegistry.scan(root)

        assert registry.detected_ecosystems == frozenset({"go", "node"})
        assert registry.evidence["node"] == "web/package.json"

    def test_dependency_dirs_skipped(self, make_tree: Callable[[dict], Path]) -> None:
        """Manifests inside node_modules/ do not count."""
        root = make_tree({"node_modules/left-pad/package.json": "{}", "main.go": ""})

        registry = EcosystemRegistry.scan(root)

        assert registry.detected_ecosystems == frozenset()

    def test_lock_globs_stable(self) -> None:
        """Lock globs are listed in sorted ecosystem order."""
        registry = EcosystemRegistry(detected_ecosystems=frozenset({"rust", "go"}))

        assert registry.lock_globs() == ("go.sum", "Cargo.lock")


class TestEcosystemLockDetector:
    """Tests for EcosystemLockDetector."""

    def test_go_project(self, make_tree: Callable[[dict], Path]) -> None:
        """With only go.mod, go.sum is excluded but package-lock.json is not."""
        root = make_tree(
            {
                "go.mod": "module x\n",
                "go.sum": "example.com/a v1.0.0 h1:abc=\n",
                "package-lock.json": "{}",
            }
        )
        detector = EcosystemLockDetector(EcosystemRegistry.scan(root))

        assert detector.match("go.sum") is True
        assert detector.match("package-lock.json") is False
        assert detector.kind is RuleKind.ECOSYSTEM_LOCK

    def test_nested_lock_file(self) -> None:
        """Lock files are matched by basename at any depth."""
        detector = EcosystemLockDetector(
            EcosystemRegistry(detected_ecosystems=frozenset({"node"}))
        )

        assert detector.match("web/yarn.lock") is True
        assert detector.match("web/pnpm-lock.yaml") is True
        assert detector.match("web/yarn.lock.bak") is False

    def test_glob_lock_names(self) -> None:
        """Glob entries such as *.nuget.props match generated .NET files."""
        detector = EcosystemLockDetector(
            EcosystemRegistry(detected_ecosystems=frozenset({"dotnet"}))
        )

        assert detector.match("obj/App.csproj.nuget.props") is True
        assert detector.match("obj/project.assets.json") is True

    def test_no_ecosystems(self) -> None:
        """An empty registry excludes nothing."""
        detector = EcosystemLockDetector(EcosystemRegistry())

        assert detector.match("Cargo.lock") is False
