import pytest

from sandpath import Path, string_from_bytes


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0B"),
        (512, "512B"),
        (1000, "1000B"),
        (1023, "1023B"),
        (1024, "1KB"),
        (1536, "2KB"),
        (2560, "2KB"),
        (31000, "30KB"),
        (768 * 1024, "768KB"),
        (1024 * 1024 - 1, "1024KB"),
        (1024 * 1024, "1.0MB"),
        (int(2.4 * 1024 * 1024), "2.4MB"),
        (1024**3 - 1, "1024.0MB"),
        (1024**3, "1.0G"),
        (int(1.2 * 1024**3), "1.2G"),
        (1024**4, "1.0T"),
        (5 * 1024**5, "5120.0T"),
    ],
)
def test_string_from_bytes(size, expected):
    assert string_from_bytes(size) == expected


def test_unit_is_chosen_on_unrounded_value():
    # 1023.6KB прячется за "1024KB", но это всё ещё KB: MB начинается с 1024*1024
    assert string_from_bytes(1024 * 1024 - 400) == "1024KB"


def test_static_alias_on_path():
    assert Path.string_from_bytes(1536) == "2KB"


def test_negative_is_rejected():
    with pytest.raises(ValueError):
        string_from_bytes(-1)
