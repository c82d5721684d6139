from .records import (
    RecordValidationError,
    apply_breeding_changes,
    compute_adg,
    register_breeding,
    register_farrowing,
    register_growth_record,
    register_health_record,
    register_weaning,
    transfer_piglets,
)

__all__ = [
    "RecordValidationError",
    "apply_breeding_changes",
    "compute_adg",
    "register_breeding",
    "register_farrowing",
    "register_growth_record",
    "register_health_record",
    "register_weaning",
    "transfer_piglets",
]
