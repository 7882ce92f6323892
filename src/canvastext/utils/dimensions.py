"""Box dimension utilities."""

from dataclasses import dataclass
from typing import Optional, Union

from canvastext.types import AUTO


@dataclass(frozen=True)
class BoxDimensions:
    """
    Content box available to the layout pass (padding already removed).

    A None extent means the axis is unbounded ("auto").
    """

    width: Optional[float]
    height: Optional[float]
    padding: float


def resolve_extent(value: Union[float, str, None]) -> Optional[float]:
    """
    Resolve a width/height style value to a number or None.

    Args:
        value: A number, "auto" or None.

    Returns:
        The numeric extent, or None when the axis is unbounded.
    """
    if value is None or value == AUTO:
        return None
    return float(value)


def resolve_box(width: Union[float, str, None], height: Union[float, str, None], padding: float) -> BoxDimensions:
    """
    Compute the content box for a node of the given outer size.

    Args:
        width: Outer width, "auto" or None.
        height: Outer height, "auto" or None.
        padding: Padding applied on every side.

    Returns:
        BoxDimensions with padding removed from fixed axes.
    """
    outer_width = resolve_extent(width)
    outer_height = resolve_extent(height)
    return BoxDimensions(
        width=outer_width - padding * 2 if outer_width is not None else None,
        height=outer_height - padding * 2 if outer_height is not None else None,
        padding=padding,
    )
