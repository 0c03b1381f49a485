"""Loading and rewriting of swiftc output file maps for incremental builds.

An output file map tells the Swift driver, for each source file, where to write
each kind of output::

    {
      "": {"swift-dependencies": "out/module.swiftdeps"},
      "a.swift": {"object": "out/a.o", "swift-dependencies": "out/a.swiftdeps"}
    }

Build sandboxes are thrown away between invocations, so the outputs the driver
needs to decide what to recompile would be lost. ``OutputFileMap`` moves those
outputs into a persistent incremental storage area and remembers where each
one went, so the caller can copy them back to the locations the build system
declared once the compile finishes.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .constants import GLOBAL_KEY
from .errors import ParseError, PathDerivationConflict
from .fs_utils import read_bytes, write_bytes_atomic
from .logger import logger
from .path_derivation import derive_relocated_path
from .types import IncrementalConfig

if TYPE_CHECKING:
    from collections.abc import Mapping


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate key {key!r}")
        result[key] = value
    return result


def _find_unencodable(value: Any) -> str | None:
    """Return the first string in ``value`` that cannot be written back as UTF-8."""
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            return value
        return None
    if isinstance(value, dict):
        items = [*value.keys(), *value.values()]
    elif isinstance(value, list):
        items = value
    else:
        return None
    for item in items:
        bad = _find_unencodable(item)
        if bad is not None:
            return bad
    return None


def parse_output_file_map(content: bytes, path: Path | str | None = None) -> dict[str, Any]:
    """Parse and validate the bytes of an output file map.

    Raises ParseError unless the content is UTF-8 JSON whose top level and
    every output record are objects, and whose strings are all valid Unicode.
    """
    try:
        text = content.decode("utf-8")
        document = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except UnicodeDecodeError as err:
        raise ParseError(f"not valid UTF-8 ({err.reason})", path) from err
    except ValueError as err:
        # JSONDecodeError is a ValueError, as are duplicate keys
        raise ParseError(f"malformed JSON ({err})", path) from err

    if not isinstance(document, dict):
        raise ParseError(f"expected an object at the top level, got {type(document).__name__}", path)

    # JSON escapes can produce lone surrogates, which UTF-8 cannot encode
    bad = _find_unencodable(document)
    if bad is not None:
        raise ParseError(f"string {bad!r} is not valid Unicode", path)

    for src, outputs in document.items():
        if not isinstance(outputs, dict):
            raise ParseError(f"outputs for {src!r} must be an object, got {type(outputs).__name__}", path)

    return document


def serialize_output_file_map(document: Mapping[str, Any]) -> bytes:
    """Serialize a document the way it is written to disk."""
    return (json.dumps(document, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


class OutputFileMap:
    """A swiftc output file map rewritten to support incremental compilation.

    One instance serves one compilation request. ``read_from_path`` loads the
    map and redirects incremental outputs; ``incremental_outputs`` then tells
    the caller where each redirected output will really be written.
    """

    def __init__(self, config: IncrementalConfig | None = None) -> None:
        self._config = config or IncrementalConfig()
        self._json: dict[str, Any] = {}
        self._incremental_outputs: dict[str, str] = {}

    @property
    def config(self) -> IncrementalConfig:
        return self._config

    @property
    def json(self) -> dict[str, Any]:
        """A copy of the current, possibly rewritten, document."""
        return copy.deepcopy(self._json)

    @property
    def incremental_outputs(self) -> Mapping[str, str]:
        """Original output path -> location in the incremental storage area, sorted by key."""
        return MappingProxyType(self._incremental_outputs)

    @property
    def storage_root(self) -> Path | None:
        """The configured storage root; ``None`` when each output derives its own."""
        return self._config.storage_root

    def read_from_path(self, path: Path | str) -> None:
        """Read the output file map at ``path`` and update it for incremental builds.

        Nothing on the instance changes unless both the read and the rewrite
        succeed.
        """
        path = Path(path)
        document = parse_output_file_map(read_bytes(path), path)
        incremental_outputs = self._update_for_incremental(document, path)

        self._json = document
        self._incremental_outputs = incremental_outputs

        logger.info(
            "Loaded output file map",
            path=str(path),
            sources=sum(1 for src in document if src != GLOBAL_KEY),
            redirected=len(incremental_outputs),
            storage_root=str(self._config.storage_root) if self._config.storage_root else None,
        )

    def write_to_path(self, path: Path | str) -> None:
        """Write the output file map as JSON to ``path``, replacing it atomically."""
        path = Path(path)
        write_bytes_atomic(path, serialize_output_file_map(self._json))
        logger.info("Wrote output file map", path=str(path), sources=len(self._json))

    def _update_for_incremental(
        self,
        document: dict[str, Any],
        path: Path,
    ) -> dict[str, str]:
        """Replace incremental output paths in ``document`` with storage-area paths.

        Returns the relocation table sorted by original path.
        """
        storage_root = self._config.storage_root
        redirected_kinds = self._config.redirected_kinds
        strategy = self._config.strategy
        incremental_outputs: dict[str, str] = {}
        owners: dict[str, str] = {}

        for src, outputs in document.items():
            # Module-wide outputs stay where the build system put them
            if src == GLOBAL_KEY:
                continue

            for kind, original in outputs.items():
                if kind not in redirected_kinds:
                    continue
                if not isinstance(original, str):
                    raise ParseError(
                        f"{kind!r} output for {src!r} must be a string, got {type(original).__name__}",
                        path,
                    )

                relocated = incremental_outputs.get(original)
                if relocated is None:
                    relocated = derive_relocated_path(original, storage_root, strategy)
                    owner = owners.get(relocated)
                    if owner is not None:
                        raise PathDerivationConflict(relocated, (owner, original))
                    owners[relocated] = original
                    incremental_outputs[original] = relocated

                outputs[kind] = relocated
                logger.debug("Redirected incremental output", src=src, kind=kind, original=original, relocated=relocated)

        return dict(sorted(incremental_outputs.items()))
