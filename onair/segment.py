"""
Segment model.

A Segment is one play request issued by the scheduler: which category
it came from, its catalog index, and the file to play.
"""

from dataclasses import dataclass
from typing import Literal

SegmentCategory = Literal["song", "combo", "transition", "intro"]


@dataclass(frozen=True)
class Segment:
    """
    A single scheduled audio item.

    Attributes:
        category: Catalog pool the item was drawn from
        index: Position of the item within its pool
        filename: Filename as listed in the station document
        path: Filename resolved against the audio directory
    """
    category: SegmentCategory
    index: int
    filename: str
    path: str
