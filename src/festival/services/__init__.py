from .registration_service import (
    register_participant,
    list_registrations,
    compute_statistics,
    delete_registration,
)

__all__ = [
    "register_participant",
    "list_registrations",
    "compute_statistics",
    "delete_registration",
]
