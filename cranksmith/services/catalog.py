"""Component catalog registry: bike-type tables, cranksets and cassettes.

This is the read-only source of components the engine computes over. Records
are kept in the raw shape the catalog is published in (``bikeType`` may be a
string or a list, ``speeds`` is text such as "11-speed") and are turned into
immutable ``Component`` models once, on first lookup.

Lookup rules:
  1. Components are matched by bike type; gravel also sees mtb parts so that
     "mullet" setups (road levers, mtb cassette) can be built.
  2. Unknown ids and bike types return None / empty results, never raise.

Cassette records list every cog so per-gear speeds are real, not just the
two end points.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from ..core.enums import BikeType
from ..models.component import Component, Setup

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type alias for raw catalog entries
# ---------------------------------------------------------------------------
CatalogEntry = dict[str, Any]

# ---------------------------------------------------------------------------
# Bike-type tables
#
# wheel_sizes / tire_widths are the allowed sets used by setup validation.
# Widths below 5 are inch-denominated tires (2.35 = 2.35").
# ---------------------------------------------------------------------------

BIKE_CONFIG: dict[str, dict[str, Any]] = {
    "road": {
        "name": "Road Bike",
        "description": "Optimized for speed and efficiency on paved roads",
        "wheel_sizes": ["700c"],
        "tire_widths": [23, 25, 28, 32, 35, 38],
        "default_setup": {
            "wheel": "700c",
            "tire": 25,
            "crankset": "shimano-105-r7000-50-34",
            "cassette": "shimano-105-r7000-11-28",
        },
    },
    "gravel": {
        "name": "Gravel Bike",
        "description": "Versatile design for mixed terrain and adventure riding",
        "wheel_sizes": ["700c", "650b"],
        "tire_widths": [32, 35, 38, 40, 42, 45, 47, 50, 2.0, 2.1, 2.2, 2.25, 2.35],
        "default_setup": {
            "wheel": "700c",
            "tire": 40,
            "crankset": "shimano-grx-rx600-46-30",
            "cassette": "shimano-grx-rx600-11-42",
        },
    },
    "mtb": {
        "name": "Mountain Bike",
        "description": "Built for off-road trails and technical terrain",
        "wheel_sizes": ["26-inch", "27.5-inch", "29-inch"],
        "tire_widths": [2.1, 2.25, 2.35, 2.4, 2.5, 2.6],
        "default_setup": {
            "wheel": "29-inch",
            "tire": 2.35,
            "crankset": "sram-gx-eagle-32",
            "cassette": "sram-gx-eagle-10-52",
        },
    },
}

# ---------------------------------------------------------------------------
# Component registry
# ---------------------------------------------------------------------------

CRANKSETS: list[CatalogEntry] = [
    # =========================================================================
    # Shimano road
    # =========================================================================
    {"id": "shimano-claris-r2000-50-34", "model": "Shimano Claris R2000", "variant": "50/34T", "weight": 900, "bikeType": "road", "teeth": [50, 34], "speeds": "8-speed"},
    {"id": "shimano-sora-r3000-50-34", "model": "Shimano Sora R3000", "variant": "50/34T", "weight": 850, "bikeType": "road", "teeth": [50, 34], "speeds": "9-speed"},
    {"id": "shimano-sora-r3000-50-39-30", "model": "Shimano Sora R3000", "variant": "50/39/30T", "weight": 900, "bikeType": "road", "teeth": [50, 39, 30], "speeds": "9-speed"},
    {"id": "shimano-tiagra-r4700-50-34", "model": "Shimano Tiagra R4700", "variant": "50/34T", "weight": 785, "bikeType": "road", "teeth": [50, 34], "speeds": "10-speed"},
    {"id": "shimano-105-r7000-50-34", "model": "Shimano 105 R7000", "variant": "50/34T", "weight": 713, "bikeType": "road", "teeth": [50, 34], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-52-36", "model": "Shimano 105 R7000", "variant": "52/36T", "weight": 742, "bikeType": "road", "teeth": [52, 36], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-53-39", "model": "Shimano 105 R7000", "variant": "53/39T", "weight": 754, "bikeType": "road", "teeth": [53, 39], "speeds": "11-speed"},
    {"id": "shimano-105-r7100-50-34", "model": "Shimano 105 R7100", "variant": "50/34T", "weight": 754, "bikeType": "road", "teeth": [50, 34], "speeds": "12-speed"},
    {"id": "shimano-ultegra-r8000-50-34", "model": "Shimano Ultegra R8000", "variant": "50/34T", "weight": 674, "bikeType": "road", "teeth": [50, 34], "speeds": "11-speed"},
    {"id": "shimano-ultegra-r8000-52-36", "model": "Shimano Ultegra R8000", "variant": "52/36T", "weight": 681, "bikeType": "road", "teeth": [52, 36], "speeds": "11-speed"},
    {"id": "shimano-ultegra-r8000-53-39", "model": "Shimano Ultegra R8000", "variant": "53/39T", "weight": 690, "bikeType": "road", "teeth": [53, 39], "speeds": "11-speed"},
    # =========================================================================
    # Shimano gravel
    # =========================================================================
    {"id": "shimano-grx-rx600-46-30", "model": "Shimano GRX RX600", "variant": "46/30T", "weight": 809, "bikeType": ["road", "gravel"], "teeth": [46, 30], "speeds": "11-speed"},
    {"id": "shimano-grx-rx600-1x-40", "model": "Shimano GRX RX600 1x", "variant": "40T", "weight": 743, "bikeType": "gravel", "teeth": [40], "speeds": "11-speed"},
    {"id": "shimano-grx-rx810-48-31", "model": "Shimano GRX RX810", "variant": "48/31T", "weight": 710, "bikeType": ["road", "gravel"], "teeth": [48, 31], "speeds": "11-speed"},
    {"id": "shimano-grx-rx810-1x-42", "model": "Shimano GRX RX810 1x", "variant": "42T", "weight": 655, "bikeType": "gravel", "teeth": [42], "speeds": "11-speed"},
    # =========================================================================
    # SRAM gravel
    # =========================================================================
    {"id": "sram-rival-xplr-axs-1x-40", "model": "SRAM Rival XPLR AXS 1x", "variant": "40T", "weight": 705, "bikeType": "gravel", "teeth": [40], "speeds": "12-speed"},
    {"id": "sram-rival-xplr-axs-1x-42", "model": "SRAM Rival XPLR AXS 1x", "variant": "42T", "weight": 712, "bikeType": "gravel", "teeth": [42], "speeds": "12-speed"},
    # =========================================================================
    # MTB
    # =========================================================================
    {"id": "shimano-deore-m6100-32", "model": "Shimano Deore M6100", "variant": "32T", "weight": 790, "bikeType": "mtb", "teeth": [32], "speeds": "12-speed"},
    {"id": "shimano-xt-m8100-32", "model": "Shimano XT M8100", "variant": "32T", "weight": 628, "bikeType": "mtb", "teeth": [32], "speeds": "12-speed"},
    {"id": "sram-nx-eagle-36-22", "model": "SRAM NX Eagle 2x", "variant": "36/22T", "weight": 760, "bikeType": "mtb", "teeth": [36, 22], "speeds": "12-speed"},
    {"id": "sram-gx-eagle-30", "model": "SRAM GX Eagle", "variant": "30T", "weight": 620, "bikeType": "mtb", "teeth": [30], "speeds": "12-speed"},
    {"id": "sram-gx-eagle-32", "model": "SRAM GX Eagle", "variant": "32T", "weight": 630, "bikeType": "mtb", "teeth": [32], "speeds": "12-speed"},
    {"id": "sram-gx-eagle-34", "model": "SRAM GX Eagle", "variant": "34T", "weight": 640, "bikeType": "mtb", "teeth": [34], "speeds": "12-speed"},
]

CASSETTES: list[CatalogEntry] = [
    # =========================================================================
    # Shimano road
    # =========================================================================
    {"id": "shimano-claris-r2000-11-32", "model": "Shimano Claris CS-HG50", "variant": "11-32T", "weight": 310, "bikeType": "road", "teeth": [11, 13, 15, 18, 21, 24, 28, 32], "speeds": "8-speed"},
    {"id": "shimano-sora-r3000-11-32", "model": "Shimano Sora CS-HG400", "variant": "11-32T", "weight": 323, "bikeType": "road", "teeth": [11, 12, 14, 16, 18, 21, 24, 28, 32], "speeds": "9-speed"},
    {"id": "shimano-tiagra-r4700-11-32", "model": "Shimano Tiagra CS-HG500", "variant": "11-32T", "weight": 320, "bikeType": "road", "teeth": [11, 12, 14, 16, 18, 20, 22, 25, 28, 32], "speeds": "10-speed"},
    {"id": "shimano-105-r7000-12-25", "model": "Shimano 105 CS-R7000", "variant": "12-25T", "weight": 270, "bikeType": "road", "teeth": [12, 13, 14, 15, 16, 17, 18, 19, 21, 23, 25], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-11-28", "model": "Shimano 105 CS-R7000", "variant": "11-28T", "weight": 284, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 23, 25, 28], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-11-30", "model": "Shimano 105 CS-R7000", "variant": "11-30T", "weight": 304, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 24, 27, 30], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-11-32", "model": "Shimano 105 CS-R7000", "variant": "11-32T", "weight": 320, "bikeType": "road", "teeth": [11, 12, 13, 14, 16, 18, 20, 22, 25, 28, 32], "speeds": "11-speed"},
    {"id": "shimano-105-r7000-11-34", "model": "Shimano 105 CS-R7000", "variant": "11-34T", "weight": 335, "bikeType": "road", "teeth": [11, 13, 15, 17, 19, 21, 23, 25, 27, 30, 34], "speeds": "11-speed"},
    {"id": "shimano-105-r7100-11-34", "model": "Shimano 105 CS-R7100", "variant": "11-34T", "weight": 361, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 24, 27, 30, 34], "speeds": "12-speed"},
    {"id": "shimano-105-r7100-11-36", "model": "Shimano 105 CS-R7100", "variant": "11-36T", "weight": 391, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 24, 27, 31, 36], "speeds": "12-speed"},
    {"id": "shimano-ultegra-r8000-12-25", "model": "Shimano Ultegra CS-R8000", "variant": "12-25T", "weight": 240, "bikeType": "road", "teeth": [12, 13, 14, 15, 16, 17, 18, 19, 21, 23, 25], "speeds": "11-speed"},
    {"id": "shimano-ultegra-r8000-11-28", "model": "Shimano Ultegra CS-R8000", "variant": "11-28T", "weight": 251, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 23, 25, 28], "speeds": "11-speed"},
    {"id": "shimano-ultegra-r8000-11-30", "model": "Shimano Ultegra CS-R8000", "variant": "11-30T", "weight": 269, "bikeType": "road", "teeth": [11, 12, 13, 14, 15, 17, 19, 21, 24, 27, 30], "speeds": "11-speed"},
    # =========================================================================
    # Gravel
    # =========================================================================
    {"id": "shimano-grx-rx600-11-32", "model": "Shimano 105 CS-R7000", "variant": "11-32T", "weight": 320, "bikeType": "gravel", "teeth": [11, 12, 13, 14, 16, 18, 20, 22, 25, 28, 32], "speeds": "11-speed"},
    {"id": "shimano-grx-rx810-11-34", "model": "Shimano Ultegra CS-R8000", "variant": "11-34T", "weight": 335, "bikeType": "gravel", "teeth": [11, 13, 15, 17, 19, 21, 23, 25, 27, 30, 34], "speeds": "11-speed"},
    {"id": "shimano-grx-rx600-11-40", "model": "Shimano SLX CS-M7000", "variant": "11-40T", "weight": 470, "bikeType": "gravel", "teeth": [11, 13, 15, 17, 19, 21, 24, 27, 31, 35, 40], "speeds": "11-speed"},
    {"id": "shimano-grx-rx600-11-42", "model": "Shimano SLX CS-M7000", "variant": "11-42T", "weight": 482, "bikeType": "gravel", "teeth": [11, 13, 15, 17, 19, 21, 24, 28, 32, 37, 42], "speeds": "11-speed"},
    {"id": "sram-rival-xplr-xg1251-10-44", "model": "SRAM Rival XPLR XG-1251", "variant": "10-44T", "weight": 412, "bikeType": "gravel", "teeth": [10, 11, 13, 15, 17, 19, 21, 24, 28, 32, 38, 44], "speeds": "12-speed"},
    # =========================================================================
    # MTB
    # =========================================================================
    {"id": "shimano-deore-m6100-10-51", "model": "Shimano Deore M6100", "variant": "10-51T", "weight": 593, "bikeType": "mtb", "teeth": [10, 12, 14, 16, 18, 21, 24, 28, 33, 39, 45, 51], "speeds": "12-speed"},
    {"id": "shimano-xt-m8100-10-45", "model": "Shimano XT M8100", "variant": "10-45T", "weight": 461, "bikeType": "mtb", "teeth": [10, 12, 14, 16, 18, 21, 24, 28, 32, 36, 40, 45], "speeds": "12-speed"},
    {"id": "shimano-xt-m8100-10-51", "model": "Shimano XT M8100", "variant": "10-51T", "weight": 470, "bikeType": "mtb", "teeth": [10, 12, 14, 16, 18, 21, 24, 28, 33, 39, 45, 51], "speeds": "12-speed"},
    {"id": "sram-nx-eagle-11-50", "model": "SRAM NX Eagle PG-1230", "variant": "11-50T", "weight": 615, "bikeType": "mtb", "teeth": [11, 13, 15, 17, 19, 22, 25, 28, 32, 36, 42, 50], "speeds": "12-speed"},
    {"id": "sram-gx-eagle-10-50", "model": "SRAM GX Eagle XG-1275", "variant": "10-50T", "weight": 450, "bikeType": "mtb", "teeth": [10, 12, 14, 16, 18, 21, 24, 28, 32, 36, 42, 50], "speeds": "12-speed"},
    {"id": "sram-gx-eagle-10-52", "model": "SRAM GX Eagle XG-1275", "variant": "10-52T", "weight": 452, "bikeType": "mtb", "teeth": [10, 12, 14, 16, 18, 21, 24, 28, 32, 36, 42, 52], "speeds": "12-speed"},
]

# Bike types whose riders may also pick parts from another family
_SHARED_BIKE_TYPES: dict[BikeType, tuple[BikeType, ...]] = {
    BikeType.GRAVEL: (BikeType.MTB,),
}


# ---------------------------------------------------------------------------
# Lookup functions
# ---------------------------------------------------------------------------

@lru_cache
def _catalog() -> dict[str, tuple[Component, ...]]:
    """Build immutable Component models from the raw registry, once."""
    catalog = {
        "cranksets": tuple(Component.model_validate(entry) for entry in CRANKSETS),
        "cassettes": tuple(Component.model_validate(entry) for entry in CASSETTES),
    }
    logger.debug(
        "Catalog loaded: %d cranksets, %d cassettes",
        len(catalog["cranksets"]),
        len(catalog["cassettes"]),
    )
    return catalog


@lru_cache
def _components_by_id() -> dict[str, Component]:
    catalog = _catalog()
    return {c.id: c for c in catalog["cranksets"] + catalog["cassettes"]}


def get_bike_config(bike_type: str | BikeType) -> dict[str, Any] | None:
    """Return a copy of the wheel/tire/default tables for a bike type."""
    parsed = BikeType.from_string(bike_type)
    if parsed is None:
        return None
    return dict(BIKE_CONFIG[parsed.value])


def get_component(component_id: str | None) -> Component | None:
    """Look up a crankset or cassette by id."""
    if not component_id:
        return None
    return _components_by_id().get(component_id)


def get_components_for_bike_type(bike_type: str | BikeType) -> dict[str, list[Component]]:
    """Cranksets and cassettes usable on a bike type.

    Gravel bikes also get mtb components for mullet setups.
    """
    parsed = BikeType.from_string(bike_type)
    if parsed is None:
        return {"cranksets": [], "cassettes": []}

    relevant = (parsed, *_SHARED_BIKE_TYPES.get(parsed, ()))
    catalog = _catalog()
    return {
        "cranksets": [c for c in catalog["cranksets"] if any(bt in c.bike_types for bt in relevant)],
        "cassettes": [c for c in catalog["cassettes"] if any(bt in c.bike_types for bt in relevant)],
    }


def get_default_setup(bike_type: str | BikeType) -> Setup | None:
    """Complete stock setup for a bike type, or None for an unknown type."""
    config = get_bike_config(bike_type)
    if config is None:
        return None
    defaults = config["default_setup"]
    return Setup(
        wheel=defaults["wheel"],
        tire=defaults["tire"],
        crankset=get_component(defaults["crankset"]),
        cassette=get_component(defaults["cassette"]),
    )
