"""Form identifiers, form handles and their string encoding."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

ZERO_FORM_ID = 0
FORM_GLOBAL_PREFIX = 0xFF
LIGHT_MOD_INDEX = 0xFE

FORM_STRING_PREFIX = "__formData|"

_U32_MASK = 0xFFFF_FFFF
_HANDLE_TAG = 0x0000_FFFF
_MAX_LIGHT_INDEX = 0xFFF


@dataclass(frozen=True)
class ModInfo:
    """A loaded plugin: regular mods have an 8-bit index, light mods use 0xFE plus a 12-bit index."""

    name: str
    mod_index: int
    light_index: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.mod_index <= LIGHT_MOD_INDEX:
            raise ValueError(f"mod index out of range: {self.mod_index:#x}")
        if not 0 <= self.light_index <= _MAX_LIGHT_INDEX:
            raise ValueError(f"light index out of range: {self.light_index:#x}")

    @property
    def is_light(self) -> bool:
        return self.mod_index == LIGHT_MOD_INDEX


def full_form_id(mod: ModInfo, form_lower: int) -> int:
    """Combine a mod's index with the low bits of a form id."""
    if mod.mod_index != LIGHT_MOD_INDEX:
        return (mod.mod_index << 24) | (form_lower & 0x00FF_FFFF)
    return 0xFE00_0000 | (mod.light_index << 12) | (form_lower & 0xFFF)


class LoadOrder:
    """The set of loaded plugins, looked up by index or by name."""

    def __init__(self, mods: Iterable[ModInfo] = ()) -> None:
        self._regular: dict[int, ModInfo] = {}
        self._light: dict[int, ModInfo] = {}
        for mod in mods:
            if mod.is_light:
                self._light[mod.light_index] = mod
            else:
                self._regular[mod.mod_index] = mod

    def mod_name(self, index: int) -> str | None:
        """Name of the regular mod loaded at ``index``, if any."""
        mod = self._regular.get(index)
        return mod.name if mod else None

    def light_mod_name(self, index: int) -> str | None:
        """Name of the light mod loaded at 12-bit ``index``, if any."""
        mod = self._light.get(index)
        return mod.name if mod else None

    def lookup_mod(self, name: str) -> ModInfo | None:
        """Find a loaded mod by case-insensitive name; regular mods are searched first."""
        wanted = name.casefold()
        for mods in (self._regular, self._light):
            for mod in mods.values():
                if mod.name.casefold() == wanted:
                    return mod
        return None

    def form_from_file(self, name: str, form: int) -> int | None:
        """Absolute form id of ``form`` within the named mod, or None if not loaded."""
        mod = self.lookup_mod(name)
        if mod is None:
            return None
        return full_form_id(mod, form)


def is_form_handle(handle: int) -> bool:
    """Return True if the 64-bit value carries the form-handle tag."""
    return (handle >> 32) == _HANDLE_TAG


def form_handle_to_id(handle: int) -> int:
    return handle & _U32_MASK


def form_id_to_handle(form_id: int) -> int:
    return (_HANDLE_TAG << 32) | (form_id & _U32_MASK)


def is_static(form_id: int) -> bool:
    """Whether the form id is bound to a plugin rather than dynamic."""
    return (form_id & 0xFF00_0000) != 0xFF00_0000


def is_light(form_id: int) -> bool:
    """Whether the form id looks like it comes from a light mod."""
    return (form_id & 0xFF00_0000) == 0xFE00_0000


def local_id(form_id: int) -> int:
    """The part of the form id relative to its mod."""
    return form_id & (0x0000_0FFF if is_light(form_id) else 0x00FF_FFFF)


def form_to_string(form_id: int, load_order: LoadOrder | None = None) -> str | None:
    """Encode a form id as ``__formData|<mod>|0x<id>``.

    Returns None for a static form whose mod is not loaded.
    """
    value = form_id & _U32_MASK
    mod_name = ""

    if is_static(value):
        if is_light(value):
            name = load_order.light_mod_name((value >> 12) & 0xFFF) if load_order else None
            value &= 0x0000_0FFF
        else:
            name = load_order.mod_name(value >> 24) if load_order else None
            value &= 0x00FF_FFFF
        if name is None:
            return None
        mod_name = name

    return f"{FORM_STRING_PREFIX}{mod_name}|{value:#x}"


def is_form_string(text: str | None) -> bool:
    return text is not None and text.startswith(FORM_STRING_PREFIX)


def form_from_file(file: str, form: int, load_order: LoadOrder | None = None) -> int | None:
    """Absolute form id of ``form`` in ``file``; an empty file name means a dynamic form."""
    if not file:
        return 0xFF00_0000 | (form & _U32_MASK)
    if load_order is None:
        return None
    return load_order.form_from_file(file, form)


_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _parse_unsigned(text: str) -> int | None:
    """Parse a leading unsigned 32-bit number with automatic base, like ``strtoul(s, 0, 0)``."""
    rest = text.lstrip(" \t\n\v\f\r")
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]

    base = 10
    lowered = rest.lower()
    if lowered.startswith("0x") and lowered[2:3] and lowered[2] in _DIGITS[:16]:
        base, rest = 16, rest[2:]
    elif lowered.startswith("0"):
        base = 8

    allowed = _DIGITS[:base]
    digits = []
    for char in rest.lower():
        if char not in allowed:
            break
        digits.append(char)
    if not digits:
        return None

    value = int("".join(digits), base)
    if value > _U32_MASK:
        return None
    return (-value) & _U32_MASK if negative else value


def string_to_form(text: str | None, load_order: LoadOrder | None = None) -> int | None:
    """Decode ``__formData|<mod>|<id>`` into an absolute form id, or None."""
    if text is None or not text.startswith(FORM_STRING_PREFIX):
        return None
    rest = text[len(FORM_STRING_PREFIX):]

    mod, sep, fid = rest.partition("|")
    if not sep:
        return None

    form = _parse_unsigned(fid)
    if form is None:
        return None
    return form_from_file(mod, form, load_order)