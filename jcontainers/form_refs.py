"""References to watched forms that notice when the form is deleted."""

from __future__ import annotations

import functools
from typing import Protocol

from jcontainers.form_ids import ZERO_FORM_ID
from jcontainers.form_observer import FormEntry, FormObserver


class _HasFormId(Protocol):
    def get(self) -> int: ...


def _other_id(other: object) -> int | None:
    if isinstance(other, (FormRef, LightweightFormRef)):
        return other.get()
    return None


@functools.total_ordering
class FormRef:
    """A reference to a form that becomes expired once the form is deleted.

    Equality and ordering compare the current ids (``get()``), so they change
    when the form expires. Use ``stable_key()`` to key dictionaries or sort
    stably.
    """

    __slots__ = ("_entry",)

    def __init__(self, entry: FormEntry | None = None) -> None:
        self._entry = entry

    @classmethod
    def make_expired(cls, form_id: int) -> FormRef:
        """Create a reference to ``form_id`` that is expired from the start."""
        return cls(FormEntry.expired(form_id))

    def is_not_expired(self) -> bool:
        return self._entry is not None and not self._entry.is_deleted()

    def is_expired(self) -> bool:
        return not self.is_not_expired()

    def get(self) -> int:
        """The form id, or zero once the reference has expired."""
        return self._entry.form_id if self.is_not_expired() else ZERO_FORM_ID

    def get_raw(self) -> int:
        """The form id regardless of expiry; zero for an empty reference."""
        return self._entry.form_id if self._entry is not None else ZERO_FORM_ID

    def stable_key(self) -> tuple[int, bool]:
        """A key that orders by raw id, then expiry."""
        return (self.get_raw(), self.is_expired())

    def __bool__(self) -> bool:
        return self.is_not_expired()

    def __eq__(self, other: object) -> bool:
        other_id = _other_id(other)
        if other_id is None:
            return NotImplemented
        return self.get() == other_id

    def __lt__(self, other: object) -> bool:
        other_id = _other_id(other)
        if other_id is None:
            return NotImplemented
        return self.get() < other_id

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "expired" if self.is_expired() else "alive"
        return f"FormRef({self.get_raw():#x}, {state})"


@functools.total_ordering
class LightweightFormRef:
    """A cheap, temporary form reference: just an id and the observer to watch it with."""

    __slots__ = ("_form_id", "_observer")

    def __init__(self, form_id: int = ZERO_FORM_ID, observer: FormObserver | None = None) -> None:
        self._form_id = form_id
        self._observer = observer

    @classmethod
    def from_form_ref(cls, ref: FormRef) -> LightweightFormRef:
        """Snapshot a full reference; the result carries no observer."""
        return cls(ref.get())

    def to_form_ref(self) -> FormRef:
        """Start watching the form and return a full reference to it."""
        if self.is_expired():
            return FormRef()
        if self._observer is None:
            raise ValueError("a non-empty lightweight reference needs an observer")
        return FormRef(self._observer.watch_form(self._form_id))

    def get(self) -> int:
        return self._form_id

    def get_raw(self) -> int:
        return self._form_id

    def is_expired(self) -> bool:
        return self._form_id == ZERO_FORM_ID

    def is_not_expired(self) -> bool:
        return not self.is_expired()

    def __bool__(self) -> bool:
        return self.is_not_expired()

    def __eq__(self, other: object) -> bool:
        other_id = _other_id(other)
        if other_id is None:
            return NotImplemented
        return self._form_id == other_id

    def __lt__(self, other: object) -> bool:
        other_id = _other_id(other)
        if other_id is None:
            return NotImplemented
        return self._form_id < other_id

    def __hash__(self) -> int:
        return hash(self._form_id)

    def __repr__(self) -> str:
        return f"LightweightFormRef({self._form_id:#x})"


def make_weak_form_ref(form_id: int, observer: FormObserver) -> FormRef:
    """Watch ``form_id`` with ``observer`` and return a reference to it."""
    return FormRef(observer.watch_form(form_id))


def make_lightweight_form_ref(form_id: int, observer: FormObserver) -> LightweightFormRef:
    return LightweightFormRef(form_id, observer)