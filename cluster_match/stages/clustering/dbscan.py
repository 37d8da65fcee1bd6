"""
DBSCAN labelling over a NeighborIndex.

Explicit worklist: one label per point plus a pending queue of indices for
the cluster being grown. Points are visited in input order, so labels are
fully determined by input order, epsilon, min_points, and the distance.
"""

from collections import deque
from typing import List

from .distance import NeighborIndex

UNVISITED = -2
NOISE = -1


def run_dbscan(index: NeighborIndex, min_points: int) -> List[int]:
    """
    Label every point with a cluster number (0, 1, ... in discovery order) or NOISE.

    A point with fewer than min_points neighbors (itself included) is marked
    noise when first visited; a later cluster may still absorb it as a border
    point. Core points pull their unvisited/noise neighbors into the queue.
    """
    n = len(index)
    labels = [UNVISITED] * n
    next_label = 0

    for point in range(n):
        if labels[point] != UNVISITED:
            continue

        neighbors = index.neighbors(point)
        if len(neighbors) < min_points:
            labels[point] = NOISE
            continue

        label = next_label
        next_label += 1
        labels[point] = label

        pending = deque(nb for nb in neighbors if nb != point)
        queued = set(pending)
        queued.add(point)

        while pending:
            current = pending.popleft()
            if labels[current] not in (UNVISITED, NOISE):
                continue
            labels[current] = label

            current_neighbors = index.neighbors(current)
            if len(current_neighbors) < min_points:
                continue  # border point
            for nb in current_neighbors:
                if nb not in queued and labels[nb] in (UNVISITED, NOISE):
                    queued.add(nb)
                    pending.append(nb)

    return labels
