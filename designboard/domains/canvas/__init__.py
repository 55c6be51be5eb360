from designboard.domains.canvas.snapshot import (
    INITIAL_SCHEMA_SEQUENCES, initial_snapshot, is_valid_snapshot, validate_and_fix_snapshot
)

__all__ = [
    "INITIAL_SCHEMA_SEQUENCES",
    "initial_snapshot",
    "is_valid_snapshot",
    "validate_and_fix_snapshot"
]
