"""
End-to-end tests for the pallet optimizer.

Covers:
- Worked scenarios (single perfect layer, divisible stacking, distinct
  heights, weight-limited pallets, oversized SKU, kilogram orders)
- Configuration validation and failure kinds
- Order line handling (merging, non-positive quantities)
- Plan-wide properties on random orders: conservation, bounds,
  non-overlap, height homogeneity, orientation validity, determinism
"""

import pytest

from conftest import lines
from pallet_planner import (
    SKU,
    InvalidConfiguration,
    OrderLine,
    PalletConfig,
    PalletOptimizer,
    SkuExceedsPallet,
    UnpackableRemainder,
    WeightUnit,
)
from pallet_planner.algorithms.freight import classify_freight
from pallet_planner.algorithms.orientations import generate_orientations
from pallet_planner.core.units import LBS_PER_KG
from pallet_planner.runner.dataset import generate_order_lines


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_single_perfect_layer(self, default_config, quarter_sku):
        result = PalletOptimizer(default_config).optimize(lines((quarter_sku, 4)))

        assert result.total_pallets == 1
        pallet = result.pallets[0]
        assert pallet.id == 1
        assert len(pallet.layers) == 1
        assert pallet.layers[0].height == pytest.approx(10.0)
        assert pallet.total_height == pytest.approx(10.0)
        assert pallet.total_weight == pytest.approx(80.0)
        assert result.placed_quantities() == {"A": 4}

    def test_divisible_layers_fill_height_exactly(self, default_config, full_sku):
        result = PalletOptimizer(default_config).optimize(lines((full_sku, 6)))

        assert result.total_pallets == 1
        pallet = result.pallets[0]
        assert [layer.height for layer in pallet.layers] == [12.0] * 6
        assert pallet.total_height == pytest.approx(72.0)

    def test_distinct_heights_never_share_a_layer(self):
        config = PalletConfig(max_height=35.0)
        tall = SKU(id="T", name="Ten", length=48.0, width=40.0, height=10.0, weight=30.0)
        short = SKU(id="S", name="Six", length=48.0, width=40.0, height=6.0, weight=20.0)

        result = PalletOptimizer(config).optimize(lines((tall, 2), (short, 2)))

        pallet = result.pallets[0]
        assert [layer.height for layer in pallet.layers] == [10.0, 10.0, 6.0, 6.0]
        for layer in pallet.layers:
            assert len(layer.quantities()) == 1
        assert pallet.total_height == pytest.approx(32.0)

    def test_weight_limit_spills_to_second_pallet(self):
        config = PalletConfig(max_weight=500.0)
        heavy = SKU(id="H", name="Heavy", length=24.0, width=20.0, height=10.0, weight=100.0)

        result = PalletOptimizer(config).optimize(lines((heavy, 8)))

        assert result.total_pallets == 2
        assert [p.total_weight for p in result.pallets] == pytest.approx([500.0, 300.0])
        assert [p.quantities() for p in result.pallets] == [{"H": 5}, {"H": 3}]
        assert [p.id for p in result.pallets] == [1, 2]

    def test_oversized_sku_fails_before_packing(self, default_config, quarter_sku):
        giant = SKU(id="G", name="Giant", length=50.0, width=50.0, height=50.0, weight=1.0)
        with pytest.raises(SkuExceedsPallet) as exc_info:
            PalletOptimizer(default_config).optimize(lines((quarter_sku, 4), (giant, 1)))
        assert exc_info.value.sku is giant

    def test_kilogram_order(self):
        config = PalletConfig(max_weight=1000.0, weight_unit="kg")
        sku = SKU(id="K", name="Metric", length=24.0, width=20.0, height=10.0, weight=10.0)

        result = PalletOptimizer(config).optimize(lines((sku, 4)))

        pallet = result.pallets[0]
        assert pallet.weight_unit is WeightUnit.KG
        assert pallet.total_weight_lbs == pytest.approx(40.0 * LBS_PER_KG)
        assert pallet.total_weight == pytest.approx(40.0)
        # 88.18 lbs over 11.1 cu ft → 7.94 lbs/cu ft
        assert pallet.freight_class == "Class 125"
        assert pallet.freight_class == classify_freight(pallet.total_weight_lbs, 10.0, 48.0, 40.0)

    def test_kilogram_limit_is_normalized(self):
        config = PalletConfig(max_weight=100.0, weight_unit=WeightUnit.KG)
        sku = SKU(id="K", name="Metric", length=24.0, width=20.0, height=10.0, weight=30.0)

        result = PalletOptimizer(config).optimize(lines((sku, 4)))

        assert [p.quantities() for p in result.pallets] == [{"K": 3}, {"K": 1}]
        for pallet in result.pallets:
            assert pallet.total_weight_lbs <= config.max_weight_lbs + config.tolerance

    def test_fractional_dimensions_never_overlap(self, default_config):
        sku = SKU(id="N", name="Near quarter", length=24.0005, width=20.0, height=10.0, weight=20.0)

        result = PalletOptimizer(default_config).optimize(lines((sku, 4)))

        assert result.placed_quantities() == {"N": 4}
        for pallet in result.pallets:
            for layer in pallet.layers:
                assert layer.area_used <= default_config.footprint_area
                for i, a in enumerate(layer.items):
                    for b in layer.items[i + 1:]:
                        assert (
                            a.x_max <= b.x or b.x_max <= a.x
                            or a.y_max <= b.y or b.y_max <= a.y
                        ), f"{a} overlaps {b}"


# ---------------------------------------------------------------------------
# Configuration and failures
# ---------------------------------------------------------------------------

class TestConfiguration:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_height": 0.0},
            {"max_height": -5.0},
            {"max_weight": 0.0},
            {"max_weight": -1.0},
            {"footprint_length": 0.0},
            {"footprint_width": -40.0},
            {"max_height": float("nan")},
        ],
    )
    def test_invalid_limits_rejected_at_construction(self, overrides):
        with pytest.raises(InvalidConfiguration):
            PalletOptimizer(PalletConfig(**overrides))

    def test_unknown_weight_unit_rejected(self):
        with pytest.raises(InvalidConfiguration):
            PalletConfig(weight_unit="stone")

    def test_default_configuration(self):
        optimizer = PalletOptimizer()
        assert optimizer.config.footprint_area == pytest.approx(1920.0)
        assert optimizer.config.max_weight_lbs == pytest.approx(2000.0)


class TestUnpackableRemainder:
    def test_unit_heavier_than_pallet_limit(self, quarter_sku):
        optimizer = PalletOptimizer(PalletConfig(max_weight=10.0))
        with pytest.raises(UnpackableRemainder) as exc_info:
            optimizer.optimize(lines((quarter_sku, 2)))
        assert exc_info.value.sku is quarter_sku
        assert exc_info.value.remaining == 2

    def test_no_partial_result_on_failure(self, quarter_sku):
        heavy = SKU(id="H", name="Heavy", length=24.0, width=20.0, height=10.0, weight=900.0)
        optimizer = PalletOptimizer(PalletConfig(max_weight=500.0))
        with pytest.raises(UnpackableRemainder) as exc_info:
            optimizer.optimize(lines((quarter_sku, 4), (heavy, 1)))
        assert exc_info.value.sku is heavy


class TestOrderLines:
    def test_non_positive_quantities_are_skipped(self, default_config, quarter_sku, full_sku):
        giant = SKU(id="G", name="Giant", length=50.0, width=50.0, height=50.0, weight=1.0)
        order = lines((giant, 0), (full_sku, -2), (quarter_sku, 4))

        result = PalletOptimizer(default_config).optimize(order)

        assert result.placed_quantities() == {"A": 4}

    def test_empty_order_yields_no_pallets(self, default_config):
        result = PalletOptimizer(default_config).optimize([])
        assert result.total_pallets == 0
        assert result.total_units == 0

    def test_repeated_sku_lines_are_merged(self, default_config, quarter_sku):
        result = PalletOptimizer(default_config).optimize(lines((quarter_sku, 2), (quarter_sku, 2)))
        assert result.total_pallets == 1
        assert len(result.pallets[0].layers) == 1
        assert result.placed_quantities() == {"A": 4}

    def test_generator_input_is_accepted(self, default_config, quarter_sku):
        order = (OrderLine(sku=quarter_sku, quantity=q) for q in (1, 3))
        result = PalletOptimizer(default_config).optimize(order)
        assert result.placed_quantities() == {"A": 4}


# ---------------------------------------------------------------------------
# Plan-wide properties on random orders
# ---------------------------------------------------------------------------

SEEDS = [0, 1, 2, 3, 4]


def _requested(order):
    counts = {}
    for line in order:
        counts[line.sku.id] = counts.get(line.sku.id, 0) + line.quantity
    return counts


@pytest.fixture(scope="module", params=SEEDS)
def random_plan(request):
    """A random order and its plan on the default pallet, one per seed."""
    order = generate_order_lines(count=6, max_quantity=30, seed=request.param)
    result = PalletOptimizer(PalletConfig()).optimize(order)
    return order, result


class TestPlanProperties:
    def test_conservation(self, random_plan):
        order, result = random_plan
        assert result.placed_quantities() == _requested(order)
        assert result.total_units == sum(_requested(order).values())

    def test_bounds(self, random_plan, default_config):
        _, result = random_plan
        tol = default_config.tolerance
        for pallet in result.pallets:
            assert pallet.total_height <= default_config.max_height + tol
            assert pallet.total_weight_lbs <= default_config.max_weight_lbs + tol
            assert pallet.total_height == pytest.approx(sum(layer.height for layer in pallet.layers))

    def test_non_overlap_within_layers(self, random_plan, default_config):
        _, result = random_plan
        for pallet in result.pallets:
            for layer in pallet.layers:
                placed = layer.items
                for i, a in enumerate(placed):
                    assert a.x >= 0 and a.y >= 0
                    assert a.x_max <= default_config.footprint_length + default_config.tolerance
                    assert a.y_max <= default_config.footprint_width + default_config.tolerance
                    for b in placed[i + 1:]:
                        assert (
                            a.x_max <= b.x or b.x_max <= a.x
                            or a.y_max <= b.y or b.y_max <= a.y
                        ), f"pallet {pallet.id}: {a} overlaps {b}"

    def test_height_homogeneity(self, random_plan, default_config):
        _, result = random_plan
        for pallet in result.pallets:
            for layer in pallet.layers:
                for placed in layer.items:
                    assert abs(placed.height - layer.height) <= default_config.tolerance

    def test_orientation_validity(self, random_plan, default_config):
        _, result = random_plan
        for pallet in result.pallets:
            for layer in pallet.layers:
                for placed in layer.items:
                    options = {
                        (o.length, o.width, o.height): o
                        for o in generate_orientations(placed.sku, default_config)
                    }
                    option = options.get((placed.length, placed.width, placed.height))
                    assert option is not None
                    assert placed.rotated is option.rotated
                    sku = placed.sku
                    if placed.height == sku.height and sku.length != sku.width:
                        expected = (sku.width, sku.length) if placed.rotated else (sku.length, sku.width)
                        assert (placed.length, placed.width) == expected

    def test_determinism(self, default_config):
        order = generate_order_lines(count=6, max_quantity=30, seed=7)
        first = PalletOptimizer(default_config).optimize(order)
        second = PalletOptimizer(default_config).optimize(list(order))
        assert first.to_dict() == second.to_dict()

    def test_pallet_ids_are_sequential(self, random_plan):
        _, result = random_plan
        assert [p.id for p in result.pallets] == list(range(1, result.total_pallets + 1))
