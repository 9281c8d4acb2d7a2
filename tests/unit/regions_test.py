from ts_expect_errors.core.regions import SectionRouter, contains, lines_to_regions, whole_file_region
from ts_expect_errors.models import CommentStyle, Region, RegionKind


def _region(start: int, end: int, kind: RegionKind = RegionKind.CODE) -> Region:
    return Region(kind=kind, start=start, end=end)


def test_contains_is_inclusive_on_both_ends() -> None:
    region = _region(3, 5)
    assert contains(region, 3)
    assert contains(region, 5)
    assert not contains(region, 2)
    assert not contains(region, 6)


class TestSectionRouter:
    def test_routes_to_the_single_matching_region(self) -> None:
        template = _region(1, 4, RegionKind.MARKUP)
        script = _region(6, 10)
        router = SectionRouter([template, script])

        assert router.route(2) == template
        assert router.route(8) == script

    def test_line_between_regions_without_default_is_none(self) -> None:
        router = SectionRouter([_region(1, 4), _region(6, 10)])
        assert router.route(5) is None

    def test_falls_back_to_default_region(self) -> None:
        default = whole_file_region(20)
        router = SectionRouter([_region(5, 6)], default=default)
        assert router.route(12) == default
        assert router.route(5) == _region(5, 6)

    def test_default_does_not_cover_lines_past_its_end(self) -> None:
        router = SectionRouter([], default=whole_file_region(3))
        assert router.route(4) is None

    def test_overlapping_regions_are_rejected(self) -> None:
        router = SectionRouter([_region(1, 5), _region(4, 8)])
        assert router.route(4) is None
        assert router.route(2) == _region(1, 5)

    def test_regions_property_returns_a_copy(self) -> None:
        router = SectionRouter([_region(1, 2)])
        router.regions.clear()
        assert len(router.regions) == 1


def test_whole_file_region_covers_at_least_one_line() -> None:
    region = whole_file_region(0)
    assert (region.start, region.end) == (1, 1)
    assert region.kind is RegionKind.CODE


def test_lines_to_regions_merges_consecutive_lines() -> None:
    regions = lines_to_regions([7, 3, 4, 5, 9, 4], RegionKind.CODE, CommentStyle.JSX)
    assert [(r.start, r.end) for r in regions] == [(3, 5), (7, 7), (9, 9)]
    assert all(r.style is CommentStyle.JSX for r in regions)


def test_lines_to_regions_with_no_lines() -> None:
    assert lines_to_regions([], RegionKind.CODE, CommentStyle.JSX) == []
