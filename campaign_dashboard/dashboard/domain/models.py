"""Domain models for the campaign data bundle and its derived summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _rows(value: Any, field: str) -> Sequence[Any]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"{field} must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DevicePerf:
    device: str
    revenue: float
    spend: float
    impressions: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DevicePerf":
        return cls(
            device=_to_str(row.get("device")),
            revenue=to_float(row.get("revenue")),
            spend=to_float(row.get("spend")),
            impressions=to_float(row.get("impressions")),
        )


@dataclass(frozen=True)
class RegionPerf:
    region: str
    country: str
    revenue: float
    spend: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionPerf":
        return cls(
            region=_to_str(row.get("region")),
            country=_to_str(row.get("country")),
            revenue=to_float(row.get("revenue")),
            spend=to_float(row.get("spend")),
        )


@dataclass(frozen=True)
class WeekPerf:
    week_start: str
    revenue: float
    spend: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeekPerf":
        return cls(
            week_start=_to_str(row.get("week_start")),
            revenue=to_float(row.get("revenue")),
            spend=to_float(row.get("spend")),
        )


@dataclass(frozen=True)
class Campaign:
    """One campaign record as supplied by the data source.

    ``roas`` and ``conversion_rate`` are taken as given and never recomputed
    from the other fields.
    """

    id: Any
    name: str
    objective: str
    status: str
    medium: str
    budget: float
    spend: float
    revenue: float
    conversions: float
    conversion_rate: float
    roas: float
    device_performance: tuple[DevicePerf, ...] = ()
    regional_performance: tuple[RegionPerf, ...] = ()
    weekly_performance: tuple[WeekPerf, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Campaign":
        return cls(
            id=row.get("id"),
            name=_to_str(row.get("name")),
            objective=_to_str(row.get("objective")),
            status=_to_str(row.get("status")),
            medium=_to_str(row.get("medium")),
            budget=to_float(row.get("budget")),
            spend=to_float(row.get("spend")),
            revenue=to_float(row.get("revenue")),
            conversions=to_float(row.get("conversions")),
            conversion_rate=to_float(row.get("conversion_rate")),
            roas=to_float(row.get("roas")),
            device_performance=tuple(
                DevicePerf.from_row(item) for item in _rows(row.get("device_performance"), "device_performance")
            ),
            regional_performance=tuple(
                RegionPerf.from_row(item) for item in _rows(row.get("regional_performance"), "regional_performance")
            ),
            weekly_performance=tuple(
                WeekPerf.from_row(item) for item in _rows(row.get("weekly_performance"), "weekly_performance")
            ),
        )

    def table_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "objective": self.objective,
            "status": self.status,
            "medium": self.medium,
            "budget": self.budget,
            "spend": self.spend,
            "revenue": self.revenue,
            "conversions": self.conversions,
            "conversion_rate": self.conversion_rate,
            "roas": self.roas,
        }


@dataclass(frozen=True)
class MarketingData:
    campaigns: tuple[Campaign, ...]

    @classmethod
    def from_payload(cls, payload: Any) -> "MarketingData":
        if not isinstance(payload, Mapping):
            raise TypeError(f"Marketing data must be an object, got {type(payload).__name__}")
        campaigns = payload.get("campaigns")
        if not isinstance(campaigns, list):
            raise TypeError("Marketing data must contain a 'campaigns' list")
        return cls(campaigns=tuple(Campaign.from_row(item) for item in campaigns))


@dataclass(frozen=True)
class GroupSummary:
    """Per-key totals produced by one aggregation pass."""

    key: str
    revenue: float
    spend: float
    impressions: float | None = None
    conversions: float | None = None
    country: str | None = None

    def as_dict(self) -> dict[str, Any]:
        output: dict[str, Any] = {"key": self.key, "revenue": self.revenue, "spend": self.spend}
        if self.impressions is not None:
            output["impressions"] = self.impressions
        if self.conversions is not None:
            output["conversions"] = self.conversions
        if self.country is not None:
            output["country"] = self.country
        return output
