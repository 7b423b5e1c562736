"""Tracking of watched forms and their deletion."""

from __future__ import annotations

import threading
import weakref

from jcontainers.form_ids import (
    ZERO_FORM_ID,
    form_handle_to_id,
    is_form_handle,
)


class FormEntry:
    """Shared record of a watched form: its id and whether it has been deleted."""

    __slots__ = ("form_id", "_deleted", "__weakref__")

    def __init__(self, form_id: int, deleted: bool = False) -> None:
        self.form_id = form_id
        self._deleted = deleted

    @classmethod
    def expired(cls, form_id: int) -> FormEntry:
        """Create an entry that is already marked deleted."""
        return cls(form_id, deleted=True)

    def set_deleted(self) -> None:
        self._deleted = True

    def is_deleted(self) -> bool:
        return self._deleted

    def __repr__(self) -> str:
        state = "deleted" if self._deleted else "alive"
        return f"FormEntry({self.form_id:#x}, {state})"


class FormObserver:
    """Hands out one shared entry per form id and flags entries when forms are deleted.

    Entries are held weakly: once nobody references an entry it expires.
    """

    def __init__(self) -> None:
        self._watched: dict[int, weakref.ref[FormEntry] | None] = {}
        self._lock = threading.Lock()

    def watch_form(self, form_id: int) -> FormEntry | None:
        """Return the live entry for ``form_id``, creating one if needed.

        The zero form id is never watched and yields None.
        """
        if form_id == ZERO_FORM_ID:
            return None

        with self._lock:
            ref = self._watched.get(form_id)
            entry = ref() if ref is not None else None
            if entry is None or entry.is_deleted():
                entry = FormEntry(form_id)
                self._watched[form_id] = weakref.ref(entry)
            return entry

    def on_form_deleted(self, handle: int) -> None:
        """Mark the entry for the form behind ``handle`` as deleted.

        Values that are not form handles are ignored.
        """
        if not is_form_handle(handle):
            return

        form_id = form_handle_to_id(handle)
        with self._lock:
            if form_id not in self._watched:
                return
            ref = self._watched[form_id]
            entry = ref() if ref is not None else None
            if entry is not None:
                entry.set_deleted()
                self._watched[form_id] = None

    def remove_expired_forms(self) -> None:
        """Drop records whose entries are gone or were released on deletion."""
        with self._lock:
            self._watched = {
                form_id: ref
                for form_id, ref in self._watched.items()
                if ref is not None and ref() is not None
            }

    def forms_count(self) -> int:
        """Number of form ids currently recorded, expired ones included."""
        return len(self._watched)

    def clear(self) -> None:
        with self._lock:
            self._watched.clear()