"""Unit tests for coverage."""

import numpy as np
import pytest

from smartcity.core.coverage import counter_coverage, coverage, covered_mask
from smartcity.core.entities import Building, BuildingKind, Tower


def home(x, y):
    return Building(kind=BuildingKind.RESIDENTIAL, position=(x, y))


class TestEmptyCity:
    """Tests for degenerate inputs."""

    def test_no_buildings_is_zero(self):
        assert coverage([], [], 60.0) == 0.0

    @pytest.mark.parametrize("n_towers", [1, 3, 10])
    def test_no_buildings_is_zero_whatever_the_towers(self, n_towers):
        towers = [Tower(position=(10.0 * i, 0.0), level=i + 1) for i in range(n_towers)]
        assert coverage([], towers, 60.0) == 0.0

    def test_no_towers_is_zero(self):
        assert coverage([home(0, 0), home(5, 5)], [], 60.0) == 0.0

    def test_mask_shape_without_towers(self):
        mask = covered_mask([home(0, 0), home(5, 5)], [], 60.0)
        assert mask.shape == (2,)
        assert not mask.any()


class TestSpatialCoverage:
    """Tests for the geometric coverage query."""

    def test_building_near_tower_is_covered(self):
        # distance ≈ 14.1 < 60
        assert coverage([home(10, 10)], [Tower(position=(0, 0))], 60.0) == 100.0

    def test_building_far_from_tower_is_uncovered(self):
        # distance ≈ 141.4 > 60
        assert coverage([home(0, 0)], [Tower(position=(100, 100))], 60.0) == 0.0

    def test_boundary_is_uncovered(self):
        assert coverage([home(60, 0)], [Tower(position=(0, 0))], 60.0) == 0.0

    def test_just_inside_boundary_is_covered(self):
        assert coverage([home(59.999, 0)], [Tower(position=(0, 0))], 60.0) == 100.0

    def test_level_scales_radius(self):
        buildings = [home(100, 0)]
        assert coverage(buildings, [Tower(position=(0, 0), level=1)], 60.0) == 0.0
        assert coverage(buildings, [Tower(position=(0, 0), level=2)], 60.0) == 100.0

    def test_partial_coverage(self):
        buildings = [home(0, 0), home(300, 0), home(10, 0), home(300, 100)]
        towers = [Tower(position=(0, 0))]
        assert coverage(buildings, towers, 60.0) == 50.0

    def test_any_tower_suffices(self):
        buildings = [home(0, 0), home(300, 0)]
        towers = [Tower(position=(5, 0)), Tower(position=(295, 0))]
        assert coverage(buildings, towers, 60.0) == 100.0

    def test_mask_marks_covered_buildings(self):
        buildings = [home(0, 0), home(300, 0), home(10, 0)]
        mask = covered_mask(buildings, [Tower(position=(0, 0))], 60.0)
        assert mask.tolist() == [True, False, True]


class TestMonotonicity:
    """Coverage never drops when signal is added."""

    def test_upgrading_a_tower_never_reduces_coverage(self, rng):
        buildings = [home(*rng.uniform(0, 400, size=2)) for _ in range(30)]
        tower = Tower(position=(200.0, 200.0))

        previous = coverage(buildings, [tower], 60.0)
        for _ in range(5):
            tower = tower.upgraded()
            current = coverage(buildings, [tower], 60.0)
            assert current >= previous
            previous = current

    def test_adding_a_tower_never_reduces_coverage(self, rng):
        buildings = [home(*rng.uniform(0, 400, size=2)) for _ in range(30)]
        towers = []

        previous = coverage(buildings, towers, 60.0)
        for _ in range(8):
            towers.append(Tower(position=tuple(rng.uniform(0, 400, size=2))))
            current = coverage(buildings, towers, 60.0)
            assert current >= previous
            previous = current


class TestCounterCoverage:
    """Tests for the counter-mode meter."""

    def test_increments(self):
        assert counter_coverage(0.0, 10.0) == 10.0
        assert counter_coverage(40.0, 10.0) == 50.0

    def test_caps_at_100(self):
        assert counter_coverage(95.0, 10.0) == 100.0
        assert counter_coverage(100.0, 10.0) == 100.0
