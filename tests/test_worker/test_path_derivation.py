"""Tests for relocated path derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from swift_worker.errors import UnsupportedPathError
from swift_worker.path_derivation import (
    default_storage_root,
    derive_digest_path,
    derive_mirror_path,
    derive_relocated_path,
)

ROOT = Path("/var/cache/incremental")


class TestDigestPath:
    def test_keeps_basename_under_root(self) -> None:
        relocated = derive_digest_path("/tmp/a.swiftdeps", ROOT)
        assert relocated.name == "a.swiftdeps"
        assert relocated.parent.parent == ROOT
        assert len(relocated.parent.name) == 32

    def test_is_stable(self) -> None:
        assert derive_digest_path("out/a.swiftdeps", ROOT) == derive_digest_path("out/a.swiftdeps", ROOT)

    def test_same_name_in_different_directories_does_not_collide(self) -> None:
        originals = [
            "out/a.swiftdeps",
            "out/sub/a.swiftdeps",
            "/out/a.swiftdeps",
            "other/out/a.swiftdeps",
            "out//a.swiftdeps",
        ]
        relocated = {derive_digest_path(original, ROOT) for original in originals}
        assert len(relocated) == len(originals)

    def test_empty_path_is_rejected(self) -> None:
        with pytest.raises(UnsupportedPathError):
            derive_digest_path("", ROOT)


class TestMirrorPath:
    def test_absolute_and_relative_are_kept_apart(self) -> None:
        assert derive_mirror_path("/tmp/a.swiftdeps", ROOT) == ROOT / "abs" / "tmp" / "a.swiftdeps"
        assert derive_mirror_path("tmp/a.swiftdeps", ROOT) == ROOT / "rel" / "tmp" / "a.swiftdeps"

    def test_parent_segments_are_rejected(self) -> None:
        with pytest.raises(UnsupportedPathError):
            derive_mirror_path("out/../../etc/passwd", ROOT)

    def test_root_only_is_rejected(self) -> None:
        with pytest.raises(UnsupportedPathError):
            derive_mirror_path("/", ROOT)


class TestDeriveRelocatedPath:
    def test_defaults_to_digest(self) -> None:
        assert derive_relocated_path("a.swiftdeps", ROOT) == str(derive_digest_path("a.swiftdeps", ROOT))

    def test_unknown_strategy_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown path derivation strategy"):
            derive_relocated_path("a.swiftdeps", ROOT, "counter")


class TestDefaultStorageRoot:
    def test_bin_outputs_store_below_bin(self) -> None:
        root = default_storage_root("bazel-out/darwin-fastbuild/bin/pkg/a.swiftdeps")
        assert root == Path("bazel-out/darwin-fastbuild/bin/_swift_incremental")

    def test_other_outputs_store_beside_the_output(self) -> None:
        assert default_storage_root("/tmp/out/a.swiftdeps") == Path("/tmp/out/_swift_incremental")

    def test_relocated_path_without_root_depends_only_on_original(self) -> None:
        first = derive_relocated_path("bazel-out/cfg/bin/pkg/a.swiftdeps", None)
        second = derive_relocated_path("bazel-out/cfg/bin/pkg/a.swiftdeps", None)
        assert first == second
        assert Path(first).is_relative_to(Path("bazel-out/cfg/bin/_swift_incremental"))
        assert Path(first).name == "a.swiftdeps"
