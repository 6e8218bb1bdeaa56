"""Non-repeating random index selection."""

import random

from onair.errors import DegenerateCatalogError


def pick_next(rng: random.Random, size: int, last: int, category: str = "category") -> int:
    """
    Pick an index in [0, size) that differs from ``last``.

    Draws an offset uniformly from [1, size - 1] and steps forward from
    ``last`` modulo ``size``. The result can never equal ``last`` and is
    uniform over the remaining size - 1 indices.

    Args:
        rng: Random source (anything with ``randint``)
        size: Number of entries in the category
        last: Index played last
        category: Category name used in error messages

    Returns:
        The next index

    Raises:
        DegenerateCatalogError: If size < 2
        ValueError: If last is outside [0, size)
    """
    if size < 2:
        raise DegenerateCatalogError(category, size)
    if not 0 <= last < size:
        raise ValueError(f"last index {last} out of range for {category} of size {size}")
    offset = rng.randint(1, size - 1)
    return (last + offset) % size
