"""Copy incremental outputs back to the locations the build system declared."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .fs_utils import copy_file
from .logger import logger
from .types import CopyAction, ReconcileResult

if TYPE_CHECKING:
    from collections.abc import Mapping


def plan_reconciliation(incremental_outputs: Mapping[str, str]) -> list[CopyAction]:
    """List the copies needed after a compile, ordered by original path."""
    return [
        CopyAction(source=relocated, destination=original)
        for original, relocated in sorted(incremental_outputs.items())
    ]


def copy_incremental_outputs(incremental_outputs: Mapping[str, str]) -> ReconcileResult:
    """Copy each relocated output to its original path.

    Outputs the compiler did not produce are reported in ``missing`` rather
    than raised, since a failed or partial compile is reported by the compiler
    itself. A copy that fails raises OutputFileMapIOError.
    """
    result = ReconcileResult(copied=[], missing=[])

    for action in plan_reconciliation(incremental_outputs):
        source = Path(action.source)
        if not source.is_file():
            logger.warning("Incremental output was not produced", source=action.source, destination=action.destination)
            result.missing.append(action.source)
            continue
        copy_file(source, Path(action.destination))
        result.copied.append(action)

    logger.info("Reconciled incremental outputs", copied=len(result.copied), missing=len(result.missing))
    return result
