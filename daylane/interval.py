# daylane/interval.py
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .model import Cluster, ColumnAssignment, VisibleEvent


def build_clusters(visible: Sequence[VisibleEvent]) -> Tuple[Cluster, ...]:
    """
    Group events (sorted by clipped_start) into maximal transitive overlap clusters.

    A and C land in the same cluster whenever some B overlaps both, even if A and C
    never overlap each other; they share B's horizontal space.
    """
    clusters: List[Cluster] = []
    cur: Tuple[VisibleEvent, ...] = ()
    cluster_end = float("-inf")

    for ev in visible:
        if cur and ev.clipped_start >= cluster_end:
            clusters.append(Cluster(cluster_id=len(clusters), events=cur))
            cur = ()
            cluster_end = float("-inf")
        cur = cur + (ev,)
        cluster_end = max(cluster_end, ev.clipped_end)

    if cur:
        clusters.append(Cluster(cluster_id=len(clusters), events=cur))
    return tuple(clusters)


def assign_columns(cluster: Cluster) -> ColumnAssignment:
    """Greedy earliest-available lane; lane count equals the cluster's max overlap depth."""
    lane_ends: Tuple[float, ...] = ()
    columns: Tuple[int, ...] = ()

    for ev in cluster.events:
        lane_index = -1
        for i, lane_end in enumerate(lane_ends):
            if lane_end <= ev.clipped_start:
                lane_index = i
                break
        if lane_index < 0:
            lane_index = len(lane_ends)
            lane_ends = lane_ends + (ev.clipped_end,)
        else:
            lane_ends = lane_ends[:lane_index] + (ev.clipped_end,) + lane_ends[lane_index + 1:]
        columns = columns + (lane_index,)

    return ColumnAssignment(cluster=cluster, columns=columns, total_columns=len(lane_ends))


def assign_all_columns(clusters: Iterable[Cluster]) -> Tuple[ColumnAssignment, ...]:
    return tuple(assign_columns(c) for c in clusters)


def max_overlap_depth(ranges: Iterable[Tuple[float, float]]) -> int:
    """Largest number of half-open [start, end) ranges active at one instant (sweep line)."""
    pts: List[Tuple[float, int]] = []
    for s, e in ranges:
        if e <= s:
            continue
        pts.append((s, +1))
        pts.append((e, -1))
    # Ends sort before starts at the same instant: [a, b) and [b, c) do not overlap.
    pts.sort(key=lambda x: (x[0], x[1]))

    active = 0
    best = 0
    for _t, kind in pts:
        active += kind
        best = max(best, active)
    return best
