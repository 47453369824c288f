"""Component catalog registry tests."""

import pytest

from cranksmith.core.enums import BikeType
from cranksmith.services.catalog import (
    BIKE_CONFIG,
    CASSETTES,
    CRANKSETS,
    get_bike_config,
    get_component,
    get_components_for_bike_type,
    get_default_setup,
)


class TestRegistryIntegrity:
    def test_ids_are_unique(self):
        ids = [entry["id"] for entry in CRANKSETS + CASSETTES]
        assert len(ids) == len(set(ids))

    def test_cassette_cog_count_matches_speeds(self):
        for entry in CASSETTES:
            component = get_component(entry["id"])
            assert len(component.teeth) == component.speeds, entry["id"]

    def test_cassette_cogs_ascending(self):
        for entry in CASSETTES:
            assert list(entry["teeth"]) == sorted(entry["teeth"]), entry["id"]

    def test_defaults_reference_real_components(self):
        for bike_type, config in BIKE_CONFIG.items():
            defaults = config["default_setup"]
            assert get_component(defaults["crankset"]) is not None, bike_type
            assert get_component(defaults["cassette"]) is not None, bike_type
            assert defaults["wheel"] in config["wheel_sizes"]
            assert defaults["tire"] in config["tire_widths"]


class TestLookups:
    def test_get_component(self):
        cassette = get_component("shimano-105-r7000-11-28")
        assert cassette.model == "Shimano 105 CS-R7000"
        assert cassette.teeth == (11, 12, 13, 14, 15, 17, 19, 21, 23, 25, 28)
        assert cassette.weight == 284
        assert cassette.bike_types == (BikeType.ROAD,)

    def test_multi_type_component(self):
        crankset = get_component("shimano-grx-rx600-46-30")
        assert crankset.fits_bike_type("road")
        assert crankset.fits_bike_type(BikeType.GRAVEL)
        assert not crankset.fits_bike_type("mtb")

    @pytest.mark.parametrize("component_id", ["does-not-exist", "", None])
    def test_unknown_component(self, component_id):
        assert get_component(component_id) is None

    def test_bike_config_is_a_copy(self):
        config = get_bike_config("road")
        config["name"] = "Changed"
        assert get_bike_config("road")["name"] == "Road Bike"

    def test_unknown_bike_config(self):
        assert get_bike_config("bmx") is None

    def test_components_for_road(self):
        components = get_components_for_bike_type("road")
        assert components["cranksets"]
        assert all(c.fits_bike_type("road") for c in components["cranksets"])
        assert all(c.fits_bike_type("road") for c in components["cassettes"])

    def test_gravel_sees_mtb_parts(self):
        cassettes = get_components_for_bike_type("gravel")["cassettes"]
        ids = {c.id for c in cassettes}
        assert "shimano-grx-rx600-11-42" in ids
        assert "sram-gx-eagle-10-52" in ids

    def test_unknown_bike_type_is_empty(self):
        assert get_components_for_bike_type("bmx") == {"cranksets": [], "cassettes": []}


class TestDefaultSetup:
    @pytest.mark.parametrize("bike_type", ["road", "gravel", "mtb"])
    def test_defaults_are_complete(self, bike_type):
        setup = get_default_setup(bike_type)
        assert setup.is_complete
        assert setup.missing_fields() == []

    def test_road_default(self):
        setup = get_default_setup("road")
        assert setup.wheel == "700c"
        assert setup.tire == 25
        assert setup.crankset.id == "shimano-105-r7000-50-34"
        assert setup.cassette.id == "shimano-105-r7000-11-28"

    def test_unknown(self):
        assert get_default_setup("bmx") is None
