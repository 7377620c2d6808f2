"""
Schemas for the dashboard endpoints. Unknown fields are kept.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.services.validation import required_error


class PreferencesRequest(BaseModel):
    """
    Buyer preferences as entered on the Buyer dashboard.
    """
    model_config = ConfigDict(extra="allow")

    location: Optional[str] = None
    propertyType: Optional[str] = None
    budget: Optional[str] = None
    lifestyle: Optional[str] = None


class ListingCreateRequest(BaseModel):
    """
    New listing as entered on the Agent dashboard. Title, price and location
    are required.
    """
    model_config = ConfigDict(extra="allow")

    title: str
    description: Optional[str] = None
    price: str
    location: str

    @field_validator("title", "price", "location")
    @classmethod
    def check_required(cls, value: str, info) -> str:
        error = required_error(info.field_name, value)
        if error:
            raise ValueError(error)
        return value.strip()


class ReportRequest(BaseModel):
    """
    Developer report request.
    """
    model_config = ConfigDict(extra="allow")

    region: Optional[str] = None
    report_type: Optional[str] = None
