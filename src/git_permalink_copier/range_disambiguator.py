import logging
from typing import List, NamedTuple

from .permalink_info import LineRange

logger = logging.getLogger(__name__)


class Disambiguation(NamedTuple):
    line_range: LineRange
    verified: bool


def pick_range(candidates: List[LineRange], live_range: LineRange) -> Disambiguation:
    """
    Chooses which candidate range a link should point at.

    - no candidates: the snippet isn't in the target revision; keep the live
      line numbers, unverified
    - one candidate: use it
    - several: the one starting closest to the live selection

    Proximity is a heuristic. It holds for small edits but not for files
    whose sections were reordered. When two candidates are equally close the
    earlier one wins, which is an artifact of scan order rather than a
    promise.
    """
    if not candidates:
        logger.debug(f"Snippet not found; keeping live range {live_range} (unverified)")
        return Disambiguation(live_range, False)
    if len(candidates) == 1:
        return Disambiguation(candidates[0], True)

    # min() returns the first of equally-close candidates
    closest = min(candidates, key=lambda c: abs(c.start - live_range.start))
    logger.debug(f"Snippet occurs {len(candidates)} times; picked {closest} nearest to {live_range}")
    return Disambiguation(closest, True)
