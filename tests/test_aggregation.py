"""
Tests for dimension grouping.

Covers device/region/week/medium buckets, first-seen country capture,
chronological weeks, absent nested rows, and order independence.
"""
import math

from conftest import make_campaign
from dashboard.application.reporting.aggregation import (
    group_by,
    group_by_device,
    group_by_medium,
    group_by_region,
    group_by_week,
)
from dashboard.application.reporting.metrics import best_by, roas, sum_field


class TestGroupByDevice:
    def test_sums_per_device(self, device_campaigns):
        groups = {g.key: g for g in group_by_device(device_campaigns)}
        assert groups["Mobile"].revenue == 80
        assert groups["Mobile"].spend == 15
        assert groups["Mobile"].impressions == 1500
        assert groups["Desktop"].revenue == 20
        assert groups["Desktop"].spend == 4
        assert groups["Desktop"].impressions == 200

    def test_encounter_order(self, device_campaigns):
        assert [g.key for g in group_by_device(device_campaigns)] == ["Mobile", "Desktop"]

    def test_best_device_by_roas(self, device_campaigns):
        best = best_by(group_by_device(device_campaigns), lambda g: roas(g.revenue, g.spend))
        assert best.key == "Mobile"

    def test_missing_nested_rows_contribute_nothing(self, device_campaigns):
        campaigns = [make_campaign(id=9, device_performance=None), *device_campaigns]
        assert len(group_by_device(campaigns)) == 2

    def test_no_rows_yields_no_groups(self):
        assert group_by_device([]) == []
        assert group_by_device([make_campaign()]) == []


class TestGroupByRegion:
    def test_country_comes_from_first_row(self):
        campaigns = [
            make_campaign(id=1, regional_performance=[{"region": "Dubai", "country": "UAE", "revenue": 1, "spend": 1}]),
            make_campaign(
                id=2,
                regional_performance=[
                    {"region": "Dubai", "country": "United Arab Emirates", "revenue": 2, "spend": 3},
                    {"region": "Doha", "country": "Qatar", "revenue": 5, "spend": 1},
                ],
            ),
        ]
        groups = group_by_region(campaigns)
        assert [(g.key, g.country, g.revenue, g.spend) for g in groups] == [
            ("Dubai", "UAE", 3, 4),
            ("Doha", "Qatar", 5, 1),
        ]
        assert groups[0].impressions is None


class TestGroupByWeek:
    def test_weeks_sorted_chronologically(self):
        campaigns = [
            make_campaign(
                weekly_performance=[
                    {"week_start": "2024-01-08", "revenue": 10, "spend": 2},
                    {"week_start": "2024-01-01", "revenue": 5, "spend": 1},
                ]
            )
        ]
        assert [g.key for g in group_by_week(campaigns)] == ["2024-01-01", "2024-01-08"]


class TestGroupByMedium:
    def test_campaign_level_rows(self, sale_campaigns):
        campaigns = [
            *sale_campaigns,
            make_campaign(id=3, medium="Facebook", revenue=7, spend=1, conversions=2),
        ]
        groups = {g.key: g for g in group_by_medium(campaigns)}
        assert groups["Instagram"].revenue == 400
        assert groups["Instagram"].conversions == 0
        assert groups["Facebook"].conversions == 2


class TestGroupingProperties:
    def _campaigns(self):
        return [
            make_campaign(
                id=index,
                device_performance=[
                    {"device": device, "revenue": revenue, "spend": revenue / 3, "impressions": 10}
                    for device, revenue in pairs
                ],
            )
            for index, pairs in enumerate(
                [
                    [("Mobile", 10.1), ("Desktop", 3.3)],
                    [("Tablet", 0.7), ("Mobile", 2.2)],
                    [("Desktop", 8.9)],
                ]
            )
        ]

    def test_permutation_does_not_change_sums(self):
        campaigns = self._campaigns()
        forward = {g.key: g for g in group_by_device(campaigns)}
        backward = {g.key: g for g in group_by_device(list(reversed(campaigns)))}
        assert forward.keys() == backward.keys()
        for key, group in forward.items():
            assert math.isclose(group.revenue, backward[key].revenue)
            assert math.isclose(group.spend, backward[key].spend)

    def test_group_totals_equal_row_totals(self):
        campaigns = self._campaigns()
        rows = [row for campaign in campaigns for row in campaign.device_performance]
        groups = group_by_device(campaigns)
        assert math.isclose(sum_field(groups, "revenue"), sum_field(rows, "revenue"))

    def test_generic_group_by_returns_mapping(self, device_campaigns):
        grouped = group_by(
            device_campaigns,
            extract_rows=lambda campaign: campaign.device_performance,
            key_of=lambda row: row.device,
        )
        assert list(grouped) == ["Mobile", "Desktop"]
        assert grouped["Mobile"].impressions is None


class TestSequentialSummation:
    """Group totals equal plain left-to-right addition, bit for bit."""

    def test_ten_tenths_match_sequential_sum(self):
        campaigns = [
            make_campaign(
                id=index,
                device_performance=[{"device": "Mobile", "revenue": 0.1, "spend": 0.1, "impressions": 1}],
            )
            for index in range(10)
        ]
        expected = 0.0
        for _ in range(10):
            expected += 0.1

        (group,) = group_by_device(campaigns)
        assert group.revenue == expected
        assert group.spend == expected

    def test_group_total_equals_sequential_row_total_exactly(self):
        campaigns = [
            make_campaign(
                id=1,
                regional_performance=[{"region": "Dubai", "country": "UAE", "revenue": 0.1, "spend": 0}] * 10,
            )
        ]
        rows = [row for campaign in campaigns for row in campaign.regional_performance]
        (group,) = group_by_region(campaigns)
        assert group.revenue == sum_field(rows, "revenue")
