"""
size — человекочитаемый размер в байтах.

Правило:
- единица выбирается последовательным делением на 1024
- сравнение идёт с неокруглённым значением
- KB без дробной части, MB/G/T — один знак после точки
"""

from __future__ import annotations

_STEP = 1024.0


def string_from_bytes(size: int) -> str:
    """Переводит число байт в строку в самой крупной подходящей единице.

    Примеры: 512 -> "512B", 1536 -> "2KB", 1048576 -> "1.0MB".
    """
    size = int(size)
    if size < 0:
        raise ValueError(f"byte count must be non-negative, got {size}")

    kb = size / _STEP
    if kb < 1:
        return f"{size}B"
    mb = kb / _STEP
    if mb < 1:
        return "%.0fKB" % kb
    gb = mb / _STEP
    if gb < 1:
        return "%.1fMB" % mb
    tb = gb / _STEP
    if tb < 1:
        return "%.1fG" % gb
    return "%.1fT" % tb
