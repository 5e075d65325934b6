"""
Coordinate-Based Identifiers
============================

Derives polygon ids from a vertex location plus a collision counter.

    "<lat>_<lng>-<n>"

n is the number of already-assigned ids that START WITH "<lat>_<lng>".
Prefix matching is ambiguous when one key is a textual prefix of another
("10.1_20.2" also counts "10.1_20.25-0"); the counter still grows for a
fixed key, so output stays unique as long as no foreign id shares the
prefix.
"""

from typing import Iterable

from yardmap_zone.geometry.shapes import Coordinate


def coordinate_key(coordinate: Coordinate) -> str:
    """
    Literal concatenation of the ordinates: '<lat>_<lng>'.

    Ordinates use Python's shortest repr, so -105.10 renders as '-105.1'
    and an int ordinate stays an int ('0', not '0.0').
    """
    return f"{coordinate.lat}_{coordinate.lng}"


def next_id(existing_ids: Iterable[str], coordinate: Coordinate) -> str:
    """
    Build the next free id for a coordinate.

    Args:
        existing_ids: Ids already assigned in the working set
        coordinate: Location the id is keyed off

    Returns:
        '<lat>_<lng>-<count>'
    """
    key = coordinate_key(coordinate)
    count = sum(1 for existing in existing_ids if existing.startswith(key))
    return f"{key}-{count}"
