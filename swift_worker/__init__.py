"""Output file map rewriting for incremental Swift compilation in build workers."""

from __future__ import annotations

from .config import load_config, read_env_file
from .constants import (
    DEFAULT_REDIRECTED_KINDS,
    GLOBAL_KEY,
    INCREMENTAL_DIR_NAME,
)
from .errors import (
    OutputFileMapError,
    OutputFileMapIOError,
    ParseError,
    PathDerivationConflict,
    UnsupportedPathError,
)
from .output_file_map import OutputFileMap, parse_output_file_map, serialize_output_file_map
from .path_derivation import (
    default_storage_root,
    derive_digest_path,
    derive_mirror_path,
    derive_relocated_path,
)
from .reconcile import copy_incremental_outputs, plan_reconciliation
from .types import CopyAction, IncrementalConfig, ReconcileResult

__all__ = [
    # config
    "load_config",
    "read_env_file",
    # constants
    "DEFAULT_REDIRECTED_KINDS",
    "GLOBAL_KEY",
    "INCREMENTAL_DIR_NAME",
    # errors
    "OutputFileMapError",
    "OutputFileMapIOError",
    "ParseError",
    "PathDerivationConflict",
    "UnsupportedPathError",
    # output_file_map
    "OutputFileMap",
    "parse_output_file_map",
    "serialize_output_file_map",
    # path_derivation
    "default_storage_root",
    "derive_digest_path",
    "derive_mirror_path",
    "derive_relocated_path",
    # reconcile
    "copy_incremental_outputs",
    "plan_reconciliation",
    # types
    "CopyAction",
    "IncrementalConfig",
    "ReconcileResult",
]
