import pytest

from dashboard.domain.models import Campaign, MarketingData


def make_campaign(**overrides):
    row = {
        "id": overrides.pop("id", 1),
        "name": "Campaign",
        "objective": "Awareness",
        "status": "Active",
        "medium": "Instagram",
        "budget": 0,
        "spend": 0,
        "revenue": 0,
        "conversions": 0,
        "conversion_rate": 0,
        "roas": 0,
    }
    row.update(overrides)
    return Campaign.from_row(row)


@pytest.fixture
def sale_campaigns():
    return [
        make_campaign(id=1, name="Summer Sale", objective="Awareness", revenue=100, spend=50, roas=2.0),
        make_campaign(id=2, name="Winter Sale", objective="Conversion", revenue=300, spend=100, roas=3.0),
    ]


@pytest.fixture
def device_campaigns():
    return [
        make_campaign(
            id=1,
            device_performance=[
                {"device": "Mobile", "revenue": 50, "spend": 10, "impressions": 1000},
                {"device": "Mobile", "revenue": 30, "spend": 5, "impressions": 500},
            ],
        ),
        make_campaign(
            id=2,
            device_performance=[{"device": "Desktop", "revenue": 20, "spend": 4, "impressions": 200}],
        ),
    ]


@pytest.fixture
def full_payload():
    return {
        "campaigns": [
            {
                "id": 1,
                "name": "Summer Sale - Stories",
                "objective": "Awareness",
                "status": "Active",
                "medium": "Instagram",
                "budget": 200,
                "spend": 50,
                "revenue": 100,
                "conversions": 5,
                "conversion_rate": 2.5,
                "roas": 2.0,
                "device_performance": [
                    {"device": "Mobile", "revenue": 70, "spend": 30, "impressions": 900},
                    {"device": "Desktop", "revenue": 30, "spend": 20, "impressions": 100},
                ],
                "regional_performance": [
                    {"region": "Dubai", "country": "UAE", "revenue": 60, "spend": 30},
                    {"region": "Doha", "country": "Qatar", "revenue": 40, "spend": 20},
                ],
                "weekly_performance": [
                    {"week_start": "2024-01-08", "revenue": 60, "spend": 30},
                    {"week_start": "2024-01-01", "revenue": 40, "spend": 20},
                ],
            },
            {
                "id": "c-2",
                "name": "Winter Sale - Search",
                "objective": "Conversion",
                "status": "Paused",
                "medium": "Google Ads",
                "budget": 400,
                "spend": 100,
                "revenue": 300,
                "conversions": 12,
                "conversion_rate": 4.0,
                "roas": 3.0,
                "device_performance": [
                    {"device": "Desktop", "revenue": 300, "spend": 100, "impressions": 400},
                ],
                "regional_performance": [
                    {"region": "Dubai", "country": "United Arab Emirates", "revenue": 300, "spend": 100},
                ],
                "weekly_performance": [
                    {"week_start": "2024-01-08", "revenue": 300, "spend": 100},
                ],
            },
        ]
    }


@pytest.fixture
def marketing_data(full_payload):
    return MarketingData.from_payload(full_payload)
