# jcontainers

Helpers for working with game form identifiers and text from Python.

- `jcontainers.form_ids`: absolute form ids, 64-bit form handles, light
  (ESL) mods and the `"__formData|<plugin>|<id>"` string form. A
  `LoadOrder` of `ModInfo` entries stands in for the game's list of loaded
  mods. Functions: `full_form_id`, `is_form_handle`, `form_handle_to_id`,
  `form_id_to_handle`, `is_static`, `is_light`, `local_id`,
  `form_to_string`, `is_form_string`, `form_from_file`, `string_to_form`.
- `jcontainers.form_observer`: `FormObserver` hands out one shared
  `FormEntry` per form id and flags entries as deleted when
  `on_form_deleted` is given the form's handle. Entries are held weakly;
  `remove_expired_forms` drops records nobody uses any more.
- `jcontainers.form_refs`: `FormRef`, a reference that expires when its
  form is deleted, and `LightweightFormRef`, a cheap id-plus-observer
  holder that can be turned into a `FormRef` with `to_form_ref()`.
  `make_weak_form_ref` and `make_lightweight_form_ref` build them.
- `jcontainers.text_wrap`: `wrap_string` breaks text into lines of nearly
  equal length; `is_blank_or_space` tells which characters count as word
  breaks.

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

Wrap text into balanced lines (each word in a line is followed by one
space):

```python
from jcontainers.text_wrap import wrap_string

lines = wrap_string("The quick brown fox jumps over the lazy dog", 20)
```

`wrap_string` raises `ValueError` for a non-positive width or for bytes
that are not UTF-8, and returns `[]` for empty text.

Convert form ids to and from strings:

```python
from jcontainers.form_ids import LoadOrder, ModInfo, form_to_string, string_to_form

order = LoadOrder([
    ModInfo("Skyrim.esm", mod_index=0),
    ModInfo("Light.esl", mod_index=0xFE, light_index=1),
])
form_to_string(0x00000014, order)                  # "__formData|Skyrim.esm|0x14"
form_to_string(0xFE001ABC, order)                  # "__formData|Light.esl|0xabc"
string_to_form("__formData||0x14", order)          # 0xFF000014 (dynamic form)
string_to_form("__formData|skyrim.esm|0x14", order)  # 0x00000014
```

`form_to_string` returns `None` for a plugin-bound form whose mod is not
in the load order; `string_to_form` returns `None` for anything it cannot
decode.

Track forms and expire references:

```python
from jcontainers.form_ids import form_id_to_handle
from jcontainers.form_observer import FormObserver
from jcontainers.form_refs import make_weak_form_ref

observer = FormObserver()
ref = make_weak_form_ref(0xFF000014, observer)
observer.on_form_deleted(form_id_to_handle(0xFF000014))
ref.is_expired()   # True
ref.get()          # 0
ref.get_raw()      # 0xFF000014
```

`FormRef` compares by its current id (`get()`), so comparisons change once
a form expires, and it is not hashable; use `stable_key()` to key
dictionaries or sort stably.

## What this package does not do

It is a library only: it installs no command. It has no containers
(arrays, maps), no JSON reading or writing, no path-based lookup into
stored data, no saving of observer state and no file or directory helpers.
The loaded mod list is whatever `LoadOrder` you build; nothing is read from
a running game.