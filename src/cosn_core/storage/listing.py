"""Listing and deletion helpers for COS storage.

These helpers work on the ObjectStatus values yielded by
``CosNStorage.list_objects`` and on anything with a compatible ``delete``.
"""

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

import structlog

from cosn_core.exceptions import StorageError

from .cos_storage import ObjectStatus

# Get logger for this module
logger = structlog.get_logger(__name__)

T = TypeVar("T")

PathFilter = Callable[[str], bool]


class ListableStorage(Protocol):
    def list_objects(
        self, prefix: str = "", *, recursive: bool = True
    ) -> Iterable[ObjectStatus]: ...

    def delete(self, key: str) -> None: ...


def _basename(key: str) -> str:
    return key.rstrip("/").rsplit("/", 1)[-1]


def hidden_file_filter(key: str) -> bool:
    """Reject any object whose name starts with ``.`` or ``_``."""
    name = _basename(key)
    return not name.startswith(("_", "."))


def accept_all(key: str) -> bool:
    return True


def maybe(include: bool, value: T) -> T | None:  # noqa: FBT001
    """Return ``value`` if ``include`` is true, otherwise None."""
    return value if include else None


def apply_to_objects(
    objects: Iterable[ObjectStatus], fn: Callable[[ObjectStatus], object]
) -> int:
    """Apply ``fn`` to every object.

    Returns:
        The number of objects processed.
    """
    count = 0
    for status in objects:
        count += 1
        fn(status)
    return count


def flatmap_objects(
    objects: Iterable[ObjectStatus], fn: Callable[[ObjectStatus], T | None]
) -> list[T]:
    """Map ``fn`` over every object, keeping only the non-None results."""
    results: list[T] = []

    def _collect(status: ObjectStatus) -> None:
        result = fn(status)
        if result is not None:
            results.append(result)

    apply_to_objects(objects, _collect)
    return results


def list_and_filter(
    storage: ListableStorage,
    prefix: str = "",
    *,
    recursive: bool = True,
    path_filter: PathFilter = accept_all,
) -> list[ObjectStatus]:
    """List objects under ``prefix`` and keep those accepted by ``path_filter``."""
    return flatmap_objects(
        storage.list_objects(prefix, recursive=recursive),
        lambda status: maybe(path_filter(status.key), status),
    )


def delete_quietly(storage: ListableStorage, key: str) -> None:
    """Delete ``key``, logging failures at debug level."""
    try:
        storage.delete(key)
    except StorageError as e:
        logger.debug("COS_DELETE_FAILED", key=key, error=str(e))


def delete_with_warning(storage: ListableStorage, key: str) -> None:
    """Delete ``key``, logging failures at warning level."""
    try:
        storage.delete(key)
    except StorageError as e:
        logger.warning("COS_DELETE_FAILED", key=key, error=str(e))
