"""Shared fixtures for the pallet planner tests."""

import os
import sys

import pytest

# Ensure the src layout is importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from pallet_planner.algorithms.orientations import generate_orientations
from pallet_planner.config import PalletConfig
from pallet_planner.core.models import SKU, OrderLine, PackingItem
from pallet_planner.core.units import to_pounds


@pytest.fixture
def default_config():
    """Standard 48×40in pallet, 72in high, 2000 lbs."""
    return PalletConfig(
        footprint_length=48.0,
        footprint_width=40.0,
        max_height=72.0,
        max_weight=2000.0,
    )


@pytest.fixture
def quarter_sku():
    """A carton covering exactly a quarter of the pallet footprint."""
    return SKU(id="A", name="Quarter carton", length=24.0, width=20.0, height=10.0, weight=20.0)


@pytest.fixture
def full_sku():
    """A carton covering the whole pallet footprint, 12in high."""
    return SKU(id="F", name="Full carton", length=48.0, width=40.0, height=12.0, weight=50.0)


def make_item(sku: SKU, quantity: int, config: PalletConfig, order: int = 0) -> PackingItem:
    """Build an engine inventory row the way the optimizer does."""
    return PackingItem(
        sku=sku,
        remaining=quantity,
        orientations=tuple(generate_orientations(sku, config)),
        unit_weight_lbs=to_pounds(sku.weight, config.weight_unit),
        order=order,
    )


def lines(*pairs):
    """``lines((sku, 4), (other, 2))`` → list of OrderLine."""
    return [OrderLine(sku=sku, quantity=qty) for sku, qty in pairs]
