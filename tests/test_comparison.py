"""Comparison synthesizer tests."""

import pytest
from conftest import make_setup

from cranksmith.core.enums import ChangeKind, SpeedUnit, UpgradeVerdict
from cranksmith.services.comparison import compare_setups, summarize_changes
from cranksmith.services.gearing import compute_setup


class TestCompareSetups:
    def test_identical_setups_have_zero_deltas(self, road_compact_11_28):
        computed = compute_setup(road_compact_11_28)
        result = compare_setups(computed, computed)
        assert result.weight_change == 0
        assert result.speed_change == 0
        assert result.range_change == 0
        assert result.verdict.verdict == UpgradeVerdict.SIMILAR

    def test_lighter_proposal_has_negative_weight_change(self, road_compact_11_28):
        current = compute_setup(road_compact_11_28)
        proposed = compute_setup(make_setup("shimano-ultegra-r8000-50-34", "shimano-ultegra-r8000-11-28"))
        result = compare_setups(current, proposed)
        # (674 + 251) - (713 + 284)
        assert result.weight_change == -72
        assert result.speed_change == pytest.approx(0)
        assert ChangeKind.WEIGHT_SAVED in result.verdict.improvements
        assert result.verdict.verdict == UpgradeVerdict.WORTH_UPGRADE

    def test_speed_change_uses_top_speed(self, road_compact_11_28):
        current = compute_setup(road_compact_11_28)
        proposed = compute_setup(make_setup("shimano-105-r7000-52-36", "shimano-105-r7000-11-28"))
        result = compare_setups(current, proposed)
        assert result.speed_change == pytest.approx(proposed.metrics.high_speed - current.metrics.high_speed)
        assert result.speed_change > 0

    def test_range_change(self, road_compact_11_28, road_compact_11_30):
        current = compute_setup(road_compact_11_28)
        proposed = compute_setup(road_compact_11_30)
        result = compare_setups(current, proposed)
        assert result.range_change == proposed.gear_range - current.gear_range
        assert result.range_change > 0

    def test_speed_unit_carried(self, road_compact_11_28):
        computed = compute_setup(road_compact_11_28, speed_unit=SpeedUnit.MPH)
        assert compare_setups(computed, computed).speed_unit == SpeedUnit.MPH

    def test_mixed_units_rejected(self, road_compact_11_28):
        kmh = compute_setup(road_compact_11_28, speed_unit=SpeedUnit.KMH)
        mph = compute_setup(road_compact_11_28, speed_unit=SpeedUnit.MPH)
        with pytest.raises(ValueError):
            compare_setups(kmh, mph)


class TestSummarizeChanges:
    def test_small_changes_are_similar(self):
        verdict = summarize_changes(5, 0.1, 10)
        assert verdict.improvements == []
        assert verdict.drawbacks == []
        assert verdict.verdict == UpgradeVerdict.SIMILAR

    def test_heavier_only_is_not_recommended(self):
        verdict = summarize_changes(20, 0, 0)
        assert verdict.drawbacks == [ChangeKind.WEIGHT_ADDED]
        assert verdict.verdict == UpgradeVerdict.NOT_RECOMMENDED

    def test_single_small_gain_is_minor(self):
        verdict = summarize_changes(-20, 0, 0)
        assert verdict.improvements == [ChangeKind.WEIGHT_SAVED]
        assert verdict.verdict == UpgradeVerdict.MINOR_IMPROVEMENT

    def test_two_gains_are_worth_it(self):
        verdict = summarize_changes(0, 0.5, 30)
        assert verdict.improvements == [ChangeKind.SPEED_GAINED, ChangeKind.RANGE_ADDED]
        assert verdict.verdict == UpgradeVerdict.WORTH_UPGRADE

    def test_gain_with_drawback_is_minor(self):
        verdict = summarize_changes(-20, -0.5, 0)
        assert verdict.drawbacks == [ChangeKind.SPEED_LOST]
        assert verdict.verdict == UpgradeVerdict.MINOR_IMPROVEMENT

    @pytest.mark.parametrize(
        "weight, speed, range_",
        [(-60, 0, 0), (0, 1.5, 0), (0, 0, 60)],
    )
    def test_one_big_gain_is_worth_it(self, weight, speed, range_):
        assert summarize_changes(weight, speed, range_).verdict == UpgradeVerdict.WORTH_UPGRADE

    def test_range_loss_is_a_drawback(self):
        verdict = summarize_changes(0, 0, -30)
        assert verdict.drawbacks == [ChangeKind.RANGE_REDUCED]
