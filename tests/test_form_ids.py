import pytest

from jcontainers.form_ids import (
    LoadOrder,
    ModInfo,
    form_from_file,
    form_handle_to_id,
    form_id_to_handle,
    form_to_string,
    full_form_id,
    is_form_handle,
    is_form_string,
    is_light,
    is_static,
    local_id,
    string_to_form,
)

SKYRIM = ModInfo("Skyrim.esm", 0)
DAWNGUARD = ModInfo("Dawnguard.esm", 2)
TEST_ESL = ModInfo("test.esl", 0xFE, 3)


@pytest.fixture
def load_order():
    return LoadOrder([SKYRIM, DAWNGUARD, TEST_ESL])


def test_handle_round_trip():
    handle = form_id_to_handle(0xFF000014)
    assert handle == 0x0000FFFF00000000 | 0xFF000014
    assert is_form_handle(handle)
    assert form_handle_to_id(handle) == 0xFF000014


def test_plain_id_is_not_handle():
    assert not is_form_handle(0x14)


def test_static_and_dynamic():
    assert is_static(0x14)
    assert not is_static(0xFF000014)
    assert is_static(0xFE000014)


def test_light_detection_and_local_id():
    light = full_form_id(TEST_ESL, 0x123)
    assert is_light(light)
    assert local_id(light) == 0x123
    regular = full_form_id(DAWNGUARD, 0x123)
    assert not is_light(regular)
    assert local_id(regular) == 0x123


def test_full_form_id_regular_keeps_index_byte():
    assert full_form_id(DAWNGUARD, 0xFF123456) >> 24 == DAWNGUARD.mod_index


def test_full_form_id_light_prefix():
    assert full_form_id(TEST_ESL, 0) & 0xFF000000 == 0xFE000000
    assert (full_form_id(TEST_ESL, 0) >> 12) & 0xFFF == TEST_ESL.light_index


def test_mod_info_validation():
    with pytest.raises(ValueError):
        ModInfo("bad.esp", 0xFF)
    with pytest.raises(ValueError):
        ModInfo("bad.esl", 0xFE, 0x1000)


def test_load_order_names(load_order):
    assert load_order.mod_name(0) == "Skyrim.esm"
    assert load_order.light_mod_name(3) == "test.esl"
    assert load_order.mod_name(5) is None
    assert load_order.light_mod_name(0) is None


def test_lookup_mod_is_case_insensitive(load_order):
    assert load_order.lookup_mod("SKYRIM.ESM") == SKYRIM
    assert load_order.lookup_mod("Test.ESL") == TEST_ESL
    assert load_order.lookup_mod("missing.esp") is None


def test_dynamic_form_string(load_order):
    assert form_to_string(0xFF000014, load_order) == "__formData||0xff000014"
    assert string_to_form("__formData||0xff000014", load_order) == 0xFF000014


@pytest.mark.parametrize(
    "form_id",
    [
        0xFF000014,
        full_form_id(SKYRIM, 0x14),
        full_form_id(DAWNGUARD, 0xABCDEF),
        full_form_id(TEST_ESL, 0x4),
    ],
)
def test_string_round_trip(load_order, form_id):
    text = form_to_string(form_id, load_order)
    assert is_form_string(text)
    assert string_to_form(text, load_order) == form_id


def test_form_string_names_mod(load_order):
    assert form_to_string(full_form_id(SKYRIM, 0x14), load_order) == "__formData|Skyrim.esm|0x14"


def test_documented_light_example_ignores_mod_bits(load_order):
    result = string_to_form("__formData|test.esl|0x006780004", load_order)
    assert result == full_form_id(TEST_ESL, 4)
    assert is_light(result)
    assert local_id(result) == 4


def test_unknown_mod_fails_both_ways(load_order):
    assert form_to_string(full_form_id(ModInfo("x.esp", 9), 1), load_order) is None
    assert string_to_form("__formData|missing.esp|0x14", load_order) is None


def test_static_form_without_load_order():
    assert form_to_string(0x14) is None


@pytest.mark.parametrize(
    "text",
    [None, "", "formData||0x14", "__formData|", "__formData|Skyrim.esm", "__formData||zz"],
)
def test_invalid_strings(load_order, text):
    assert string_to_form(text, load_order) is None


def test_out_of_range_number(load_order):
    assert string_to_form("__formData||0x100000000", load_order) is None


def test_number_bases_agree():
    hexadecimal = string_to_form("__formData||0x14")
    assert string_to_form("__formData||20") == hexadecimal
    assert string_to_form("__formData||024") == hexadecimal


def test_form_from_file_empty_is_dynamic(load_order):
    assert form_from_file("", 0x14, load_order) == 0xFF000014
    assert form_from_file("Skyrim.esm", 0x14, load_order) == full_form_id(SKYRIM, 0x14)
    assert form_from_file("Skyrim.esm", 0x14) is None


def test_is_form_string():
    assert is_form_string("__formData||0x12")
    assert not is_form_string("__formdata||0x12")
    assert not is_form_string(None)