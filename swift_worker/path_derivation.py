"""Relocated path derivation for artifacts kept in the incremental storage area.

Every strategy is a pure function of the original path string and the storage
root: the same original always lands in the same slot, across processes and
builds, and distinct originals land in distinct slots.
"""

from __future__ import annotations

import hashlib
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from .constants import DIGEST_LENGTH, INCREMENTAL_DIR_NAME
from .errors import UnsupportedPathError

if TYPE_CHECKING:
    from collections.abc import Callable


def default_storage_root(original: str) -> Path:
    """Return the storage area for an artifact when no root is configured.

    Outputs under a ``bin`` directory store below ``bin/_swift_incremental``,
    so ``bazel-out/cfg/bin/pkg/a.swiftdeps`` uses
    ``bazel-out/cfg/bin/_swift_incremental``. Other outputs use a
    ``_swift_incremental`` directory beside them. The root depends only on
    the original path, never on where the output file map lives.
    """
    parent = PurePosixPath(original).parent
    if "bin" in parent.parts:
        bin_index = parent.parts.index("bin")
        return Path(*parent.parts[: bin_index + 1]) / INCREMENTAL_DIR_NAME
    return Path(parent) / INCREMENTAL_DIR_NAME


def _check_original(original: str) -> None:
    if not original:
        raise UnsupportedPathError(original, "path is empty")
    if "\x00" in original:
        raise UnsupportedPathError(original, "path contains a NUL byte")


def derive_digest_path(original: str, storage_root: Path) -> Path:
    """Place the artifact in a directory named after the SHA-256 of its original path.

    The basename is kept so the relocated file still carries its extension,
    which the compiler driver uses to recognize some outputs.
    """
    _check_original(original)
    digest = hashlib.sha256(original.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
    name = PurePosixPath(original).name or "output"
    return storage_root / digest / name


def derive_mirror_path(original: str, storage_root: Path) -> Path:
    """Mirror the original directory layout below the storage root.

    Absolute and relative originals are kept apart under ``abs/`` and ``rel/``.
    """
    _check_original(original)
    posix = PurePosixPath(original)
    if ".." in posix.parts:
        raise UnsupportedPathError(original, "'..' segments would escape the storage root")

    if posix.is_absolute():
        parts = posix.parts[1:]
        prefix = "abs"
    else:
        parts = posix.parts
        prefix = "rel"

    if not parts:
        raise UnsupportedPathError(original, "path has no file name")
    return storage_root.joinpath(prefix, *parts)


STRATEGIES: dict[str, Callable[[str, Path], Path]] = {
    "digest": derive_digest_path,
    "mirror": derive_mirror_path,
}


def derive_relocated_path(original: str, storage_root: Path | None, strategy: str = "digest") -> str:
    """Derive the relocated path for ``original`` with the named strategy.

    Without a ``storage_root`` the root comes from ``default_storage_root``.
    """
    try:
        derive = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown path derivation strategy: {strategy}") from None
    if storage_root is None:
        storage_root = default_storage_root(original)
    return str(derive(original, storage_root))
