"""
Footprint statistics: point of control, value area and imbalances.

All functions work on a price-ordered sequence of `VolumeNode` objects
(price levels sorted by price, or bins in construction order) and mutate
only the statistics flags of those nodes.
"""

from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from footprints.domain.enums import ImbalanceType

if TYPE_CHECKING:
    from footprints.domain.models.volume_node import VolumeNode


def find_point_of_control(nodes: Sequence["VolumeNode"]) -> Optional[int]:
    """
    Index of the node with the greatest total volume.

    Ties go to the earliest node in the sequence, i.e. the lowest price.

    Returns:
        Index into `nodes`, or None when `nodes` is empty
    """
    if not nodes:
        return None

    best = 0
    for i in range(1, len(nodes)):
        if nodes[i].total_volume > nodes[best].total_volume:
            best = i
    return best


def mark_point_of_control(nodes: Sequence["VolumeNode"]) -> Optional[int]:
    """Flag the POC node (clearing any previous POC flag) and return its index."""
    for node in nodes:
        node.is_point_of_control = False

    poc_index = find_point_of_control(nodes)
    if poc_index is not None:
        nodes[poc_index].is_point_of_control = True
    return poc_index


def expand_value_area(
    nodes: Sequence["VolumeNode"],
    poc_index: int,
    percentage: float = 70.0
) -> Tuple[int, int]:
    """
    Grow the value area outward from the POC until it holds `percentage` of volume.

    At each step the larger of the next node above and the next node below is
    taken; on equal volume the upper node wins. When one side is exhausted the
    other side is taken until the target is reached or both sides run out.

    Args:
        nodes: Price-ordered nodes (ascending)
        poc_index: Index of the POC inside `nodes`
        percentage: Target share of total volume, in percent

    Returns:
        (lower_index, upper_index) inclusive bounds of the value area
    """
    for node in nodes:
        node.is_in_value_area = False

    total_volume = sum(node.total_volume for node in nodes)
    target_volume = int(total_volume * (percentage / 100.0))

    poc = nodes[poc_index]
    poc.is_in_value_area = True
    accumulated = poc.total_volume

    upper = poc_index + 1
    lower = poc_index - 1
    count = len(nodes)

    while accumulated < target_volume and (upper < count or lower >= 0):
        upper_node = nodes[upper] if upper < count else None
        lower_node = nodes[lower] if lower >= 0 else None

        if upper_node is not None and (lower_node is None or upper_node.total_volume >= lower_node.total_volume):
            upper_node.is_in_value_area = True
            accumulated += upper_node.total_volume
            upper += 1
        else:
            lower_node.is_in_value_area = True
            accumulated += lower_node.total_volume
            lower -= 1

    return lower + 1, upper - 1


def detect_imbalance(node: "VolumeNode", threshold_percentage: float = 300.0) -> bool:
    """
    Flag `node` when one side outweighs the other by `threshold_percentage`.

    One-sided volume is always an imbalance. Otherwise the ratio
    max/min * 100 must reach the threshold (300 means 3x).

    Returns:
        True if the node was flagged
    """
    node.has_imbalance = False
    node.imbalance_type = ImbalanceType.NONE

    if node.total_volume == 0:
        return False

    max_vol = max(node.buy_volume, node.sell_volume)
    min_vol = min(node.buy_volume, node.sell_volume)

    if min_vol == 0:
        node.has_imbalance = True
        node.imbalance_type = ImbalanceType.BUY if node.buy_volume > 0 else ImbalanceType.SELL
        return True

    ratio = (max_vol / min_vol) * 100.0
    if ratio >= threshold_percentage:
        node.has_imbalance = True
        node.imbalance_type = (
            ImbalanceType.BUY if node.buy_volume > node.sell_volume else ImbalanceType.SELL
        )
        return True

    return False


__all__ = [
    "find_point_of_control",
    "mark_point_of_control",
    "expand_value_area",
    "detect_imbalance",
]
