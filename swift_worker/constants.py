"""Output file map constants."""

from __future__ import annotations

# Key of the output record that holds module-wide outputs.
GLOBAL_KEY = ""

INCREMENTAL_DIR_NAME = "_swift_incremental"

# Artifact kinds whose outputs must survive between builds for the driver to
# compile incrementally. Never includes "object".
DEFAULT_REDIRECTED_KINDS = frozenset(
    {
        "swift-dependencies",
        "swiftdoc",
        "swiftinterface",
        "swiftmodule",
    }
)

DEFAULT_STRATEGY = "digest"
DIGEST_LENGTH = 32

ENV_INCREMENTAL_ROOT = "SWIFT_INCREMENTAL_ROOT"
ENV_INCREMENTAL_KINDS = "SWIFT_INCREMENTAL_KINDS"
ENV_INCREMENTAL_STRATEGY = "SWIFT_INCREMENTAL_STRATEGY"
