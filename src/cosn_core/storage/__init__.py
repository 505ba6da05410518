"""COS object storage adapter and listing helpers."""

from .cos_storage import CosNStorage, ObjectStatus
from .listing import (
    accept_all,
    apply_to_objects,
    delete_quietly,
    delete_with_warning,
    flatmap_objects,
    hidden_file_filter,
    list_and_filter,
    maybe,
)

__all__ = [
    "CosNStorage",
    "ObjectStatus",
    "accept_all",
    "apply_to_objects",
    "delete_quietly",
    "delete_with_warning",
    "flatmap_objects",
    "hidden_file_filter",
    "list_and_filter",
    "maybe",
]
