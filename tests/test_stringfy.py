import pytest

from cassobee.stringfy import is_container, short_type_name, to_string, type_name


class Widget:
    pass


def test_strings_and_bytes_pass_through():
    assert to_string("abc") == "abc"
    assert to_string(b"raw") == "raw"


def test_integers():
    assert to_string(42) == str(42)
    assert to_string(-7) == str(-7)


def test_float_uses_six_decimals():
    assert to_string(1.5) == "1.500000"


def test_bool_renders_as_number():
    assert to_string(True) == "1"
    assert to_string(False) == to_string(0)


def test_list():
    assert to_string([1, 2, 3]) == "{1, 2, 3}"


def test_empty_and_nested_lists():
    assert to_string([]) == "{" + "}"
    assert to_string([[1], [2]]) == "{" + to_string([1]) + ", " + to_string([2]) + "}"


def test_set_renders_sorted():
    assert to_string({3, 1, 2}) == to_string([1, 2, 3])


def test_dict_items_render_as_pairs():
    assert to_string({"a": "b"}) == "{<a, b>}"


def test_tuple_is_space_separated():
    assert to_string((1, "a")) == "{1 a}"


def test_prefix_adds_type_name():
    text = to_string([1], prefix=True)
    assert text.startswith(type_name([1]))
    assert text.endswith(to_string([1]))


def test_unsupported_value():
    with pytest.raises(TypeError):
        to_string(object())


def test_is_container():
    assert is_container([1])
    assert is_container({1: 2})
    assert is_container({1})
    assert not is_container((1, 2))
    assert not is_container("text")


def test_type_names():
    assert type_name(Widget) == f"{Widget.__module__}.Widget"
    assert type_name(Widget()) == type_name(Widget)
    assert short_type_name(Widget()) == "Widget"
    assert type_name([]) == "list"