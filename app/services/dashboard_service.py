"""
Dashboard collaborators for the Buyer, Agent, Developer and Vendor views.

None of these are implemented yet. Each call returns a ``StubResult`` whose
``implemented`` flag is False so that callers can tell placeholder data from
real data. The placeholder values are the ones the dashboards were
prototyped with.
"""
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

HEATMAP_AUDIENCES = ("buyer", "agent")


@dataclass(frozen=True)
class StubResult:
    """
    Result of a collaborator that has no real implementation.
    """
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    implemented: bool = False

    def to_response(self) -> Dict[str, Any]:
        response = {"message": self.message, "implemented": self.implemented}
        response.update(self.data)
        return response


class PreferencesService:
    """Buyer preferences. Not persisted."""

    def get_preferences(self, user_id: int) -> StubResult:
        return StubResult(
            message="Preferences loaded (mock)!",
            data={
                "preferences": {
                    "location": "Mock Location",
                    "propertyType": "Mock Type",
                    "budget": "Mock Budget",
                    "lifestyle": "Mock Lifestyle",
                }
            },
        )

    def save_preferences(self, user_id: int, preferences: Dict[str, Any]) -> StubResult:
        return StubResult(message="Preferences saved (mock)!", data={"preferences": dict(preferences)})


class ListingsService:
    """Agent listings. Not persisted."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_listings(self, user_id: int) -> StubResult:
        return StubResult(
            message="Listings loaded (mock)!",
            data={
                "listings": [
                    {
                        "id": 1,
                        "title": "Mock Listing 1",
                        "location": "Suburb A",
                        "price": "500000",
                        "description": "A beautiful mock home.",
                    },
                    {
                        "id": 2,
                        "title": "Mock Listing 2",
                        "location": "Suburb B",
                        "price": "750000",
                        "description": "A spacious mock apartment.",
                    },
                ]
            },
        )

    def add_listing(self, user_id: int, fields: Dict[str, Any]) -> StubResult:
        listing = dict(fields)
        listing["id"] = self.rng.randint(100, 999)
        return StubResult(message="Listing added (mock)!", data={"listing": listing})

    def delete_listing(self, user_id: int, listing_id: int) -> StubResult:
        # TODO: check the listing belongs to user_id once listings are stored
        return StubResult(message=f"Listing {listing_id} deleted (mock)!")


class ReportsService:
    """Developer market reports."""

    def request_report(self, user_id: int, fields: Dict[str, Any]) -> StubResult:
        return StubResult(
            message="Your exclusive report request has been submitted!",
            data={"request": dict(fields)},
        )


class HeatmapService:
    """Suburb and market demand heatmaps."""

    def get_heatmap(self, user_id: int, audience: str) -> StubResult:
        if audience not in HEATMAP_AUDIENCES:
            raise KeyError(audience)
        return StubResult(
            message=f"{audience.capitalize()} heatmap is not available yet.",
            data={"heatmap": None},
        )
