"""Reference-counted handles.

Fonts and atlases are shared between owners. Each owner takes a reference
with reference() and gives it back with destroy(); the resource is released
when the last reference is dropped. The module-level helpers accept None so
that callers can pass optional handles through unchanged.
"""

from typing import TypeVar

from arcglyph.exceptions import ResourceReleasedError

R = TypeVar("R", bound="RefCounted")


class RefCounted:
    """Base class for handles with explicit shared ownership.

    A new handle starts with a reference count of 1, held by its creator.
    """

    def __init__(self) -> None:
        self._refcount = 1

    @property
    def refcount(self) -> int:
        """Number of owners currently holding the handle."""
        return self._refcount

    @property
    def released(self) -> bool:
        """Whether the last reference has been dropped."""
        return self._refcount == 0

    def reference(self: R) -> R:
        """Take an additional reference.

        Returns:
            The same handle

        Raises:
            ResourceReleasedError: If the handle was already released
        """
        self._check_alive()
        self._refcount += 1
        return self

    def destroy(self) -> None:
        """Drop a reference, releasing the resource when none remain.

        Raises:
            ResourceReleasedError: If the handle was already released
        """
        self._check_alive()
        self._refcount -= 1
        if self._refcount == 0:
            self._release()

    def _release(self) -> None:
        """Free owned resources. Called once, when the count reaches 0."""

    def _check_alive(self) -> None:
        if self._refcount == 0:
            raise ResourceReleasedError(type(self).__name__)


def reference(handle: R | None) -> R | None:
    """Take a reference on a handle; None is passed through."""
    if handle is None:
        return None
    return handle.reference()


def destroy(handle: RefCounted | None) -> None:
    """Drop a reference on a handle; None is ignored."""
    if handle is None:
        return
    handle.destroy()
