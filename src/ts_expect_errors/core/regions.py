import logging
from collections.abc import Iterable, Sequence

from ts_expect_errors.models import CommentStyle, Region, RegionKind

logger = logging.getLogger(__name__)


def contains(region: Region, line: int) -> bool:
    return region.start <= line <= region.end


class SectionRouter:
    """Classify document lines into the region that owns them.

    ``default`` answers for lines outside every declared region; plain
    documents pass a whole-file code region there, composite documents leave
    it unset so stray lines are ignored.
    """

    def __init__(self, regions: Sequence[Region], default: Region | None = None) -> None:
        self._regions = list(regions)
        self._default = default

    @property
    def regions(self) -> list[Region]:
        return list(self._regions)

    def route(self, line: int) -> Region | None:
        matches = [region for region in self._regions if contains(region, line)]
        if len(matches) > 1:
            logger.warning("Line %d falls in %d overlapping regions; skipping", line, len(matches))
            return None
        if matches:
            return matches[0]
        if self._default is not None and contains(self._default, line):
            return self._default
        return None


def whole_file_region(line_count: int, style: CommentStyle = CommentStyle.LINE) -> Region:
    return Region(kind=RegionKind.CODE, start=1, end=max(line_count, 1), style=style)


def lines_to_regions(lines: Iterable[int], kind: RegionKind, style: CommentStyle) -> list[Region]:
    """Compress line numbers into sorted, disjoint regions."""
    regions: list[Region] = []
    start: int | None = None
    previous: int | None = None
    for line in sorted(set(lines)):
        if start is None:
            start = line
        elif previous is not None and line != previous + 1:
            regions.append(Region(kind=kind, start=start, end=previous, style=style))
            start = line
        previous = line
    if start is not None and previous is not None:
        regions.append(Region(kind=kind, start=start, end=previous, style=style))
    return regions
