"""Tests for the guillotine packer and its free space index."""

import random

import pytest

from autonest.nesting.free_space import ContainedRectPruning, FreeSpaceIndex
from autonest.nesting.guillotine import GuillotinePacker
from autonest.nesting.models import FreeRect, Placement


def _overlaps(a, b, spacing):
    """Check whether two placements overlap once padded by spacing."""
    return (
        a.x < b.x + b.width + spacing and b.x < a.x + a.width + spacing
        and a.y < b.y + b.height + spacing and b.y < a.y + a.height + spacing
    )


class TestFreeRect:
    """Tests for FreeRect helpers."""

    def test_fits(self):
        """Test footprint fit check."""
        rect = FreeRect(0, 0, 50, 20)

        assert rect.fits(50, 20) is True
        assert rect.fits(20, 50) is False
        assert rect.fits(51, 1) is False

    def test_contains(self):
        """Test containment check."""
        outer = FreeRect(0, 0, 100, 100)

        assert outer.contains(FreeRect(10, 10, 20, 20)) is True
        assert outer.contains(outer) is True
        assert outer.contains(FreeRect(90, 90, 20, 20)) is False

    def test_area(self):
        """Test area."""
        assert FreeRect(5, 5, 10, 4).area == 40


class TestContainedRectPruning:
    """Tests for the containment-pruning free space index."""

    def test_initial_rect(self):
        """Test a new index covers the whole region."""
        index = ContainedRectPruning(200, 100)

        assert index.rects == [FreeRect(0, 0, 200, 100)]
        assert len(index) == 1
        assert index.total_area == 20000

    def test_is_free_space_index(self):
        """Test the index implements the interface."""
        assert isinstance(ContainedRectPruning(1, 1), FreeSpaceIndex)

    def test_find_best_none(self):
        """Test no candidate returns None."""
        index = ContainedRectPruning(10, 10)

        assert index.find_best(11, 5) is None

    def test_split_right_and_bottom(self):
        """Test the guillotine split shape."""
        index = ContainedRectPruning(100, 80)
        index.split(0, 30, 20)

        assert index.rects == [
            FreeRect(30, 0, 70, 80),
            FreeRect(0, 20, 30, 60),
        ]

    def test_split_exact_width(self):
        """Test no right remainder when the width is used up."""
        index = ContainedRectPruning(100, 80)
        index.split(0, 100, 20)

        assert index.rects == [FreeRect(0, 20, 100, 60)]

    def test_split_exact_fit(self):
        """Test an exact fit leaves no free space."""
        index = ContainedRectPruning(40, 40)
        index.split(0, 40, 40)

        assert index.rects == []

    def test_prune_contained(self):
        """Test contained rects are dropped."""
        index = ContainedRectPruning(100, 100)
        index._rects = [
            FreeRect(10, 10, 10, 10),
            FreeRect(0, 0, 50, 50),
        ]
        index.prune()

        assert index.rects == [FreeRect(0, 0, 50, 50)]

    def test_prune_keeps_one_duplicate(self):
        """Test identical rects collapse to a single rect."""
        index = ContainedRectPruning(100, 100)
        index._rects = [
            FreeRect(0, 0, 50, 50),
            FreeRect(0, 0, 50, 50),
        ]
        index.prune()

        assert index.rects == [FreeRect(0, 0, 50, 50)]

    def test_prune_keeps_overlaps(self):
        """Test partially overlapping rects are both kept."""
        index = ContainedRectPruning(100, 100)
        index._rects = [
            FreeRect(0, 0, 50, 50),
            FreeRect(25, 25, 50, 50),
        ]
        index.prune()

        assert len(index.rects) == 2

    def test_rects_is_a_copy(self):
        """Test callers cannot mutate the index through rects."""
        index = ContainedRectPruning(10, 10)
        index.rects.clear()

        assert len(index) == 1


class TestGuillotinePacker:
    """Tests for GuillotinePacker."""

    @pytest.fixture
    def packer(self):
        """Create a 100x100 packer without spacing."""
        return GuillotinePacker(100, 100)

    def test_init(self):
        """Test packer initialization."""
        packer = GuillotinePacker(300, 200, spacing=5)

        assert packer.bin_width == 300
        assert packer.bin_height == 200
        assert packer.spacing == 5
        assert packer.free_rectangles == [FreeRect(0, 0, 300, 200)]
        assert packer.placements == []

    def test_first_insert_at_origin(self, packer):
        """Test the first item goes to the top-left corner."""
        placement = packer.insert(30, 20, "a")

        assert placement == Placement(id="a", x=0, y=0, width=30, height=20)
        assert placement.rotated is False

    def test_insert_reports_unpadded_size(self):
        """Test spacing does not change the reported size."""
        packer = GuillotinePacker(100, 100, spacing=5)
        placement = packer.insert(20, 10, "a")

        assert placement.width == 20
        assert placement.height == 10
        assert packer.free_rectangles == [
            FreeRect(25, 0, 75, 100),
            FreeRect(0, 15, 25, 85),
        ]

    def test_insert_no_fit(self, packer):
        """Test an oversized item is refused without side effects."""
        before = packer.free_rectangles

        assert packer.insert(101, 10, "a") is None
        assert packer.free_rectangles == before
        assert packer.placements == []

    def test_spacing_counts_against_fit(self):
        """Test the padded footprint must fit."""
        packer = GuillotinePacker(50, 50, spacing=5)

        assert packer.insert(50, 10, "a") is None
        assert packer.insert(45, 10, "b") is not None

    def test_exact_fit_exhausts_region(self):
        """Test a full-size item leaves nothing free."""
        packer = GuillotinePacker(50, 50)

        assert packer.insert(50, 50, "a") is not None
        assert packer.free_rectangles == []
        assert packer.insert(1, 1, "b") is None

    def test_best_short_side_fit(self, packer):
        """Test the candidate with the smallest short-side leftover wins."""
        packer.insert(60, 40, "a")
        # Right column is 40x100 (leftover 5), bottom row 60x60 (leftover 10)
        placement = packer.insert(35, 50, "b")

        assert (placement.x, placement.y) == (60, 0)

    def test_best_short_side_fit_bottom(self, packer):
        """Test the bottom row is chosen when it is tighter."""
        packer.insert(60, 40, "a")
        placement = packer.insert(55, 55, "b")

        assert (placement.x, placement.y) == (0, 40)

    def test_tie_goes_to_first_rect(self, packer):
        """Test equal scores keep the first rect in enumeration order."""
        packer.insert(50, 50, "a")
        placement = packer.insert(50, 50, "b")

        assert (placement.x, placement.y) == (50, 0)

    def test_can_fit_does_not_mutate(self, packer):
        """Test can_fit is a pure query."""
        assert packer.can_fit(100, 100) is True
        assert packer.can_fit(101, 1) is False
        assert packer.free_rectangles == [FreeRect(0, 0, 100, 100)]

    def test_areas(self, packer):
        """Test occupied and free area bookkeeping."""
        packer.insert(100, 40, "a")

        assert packer.occupied_area == 4000
        assert packer.free_area == 6000

    def test_placements_history(self, packer):
        """Test successful inserts are recorded in order."""
        packer.insert(10, 10, "a")
        packer.insert(500, 10, "b")
        packer.insert(20, 10, "c")

        assert [p.id for p in packer.placements] == ["a", "c"]

    def test_custom_free_space(self):
        """Test a custom index is used for all bookkeeping."""

        class CountingIndex(ContainedRectPruning):
            def __init__(self, width, height):
                super().__init__(width, height)
                self.splits = 0

            def split(self, index, width, height):
                self.splits += 1
                super().split(index, width, height)

        index = CountingIndex(100, 100)
        packer = GuillotinePacker(100, 100, free_space=index)
        packer.insert(10, 10, "a")
        packer.insert(10, 10, "b")

        assert index.splits == 2
        assert packer.free_space is index

    def test_empty_custom_free_space_kept(self):
        """Test an index with no free rects is used as given."""
        index = ContainedRectPruning(100, 100)
        index._rects = []
        packer = GuillotinePacker(100, 100, free_space=index)

        assert packer.free_space is index
        assert packer.insert(1, 1, "a") is None

    @pytest.mark.parametrize("spacing", [0, 2.5, 10])
    def test_no_overlap_and_containment(self, spacing):
        """Test many inserts never overlap and stay inside the region."""
        rng = random.Random(42)
        packer = GuillotinePacker(400, 300, spacing=spacing)

        for i in range(60):
            packer.insert(rng.randint(5, 80), rng.randint(5, 80), i)

        placed = packer.placements
        assert placed
        for p in placed:
            assert p.x >= 0 and p.y >= 0
            assert p.x + p.width + spacing <= 400
            assert p.y + p.height + spacing <= 300
        for i, a in enumerate(placed):
            for b in placed[i + 1:]:
                assert not _overlaps(a, b, spacing)
