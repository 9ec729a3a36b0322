"""
API request models using Pydantic.

Fields are optional so that missing values are reported in the API's own
error envelope (400) rather than as framework validation errors.
"""
from typing import Optional
from pydantic import BaseModel, Field


class DateRangeRequest(BaseModel):
    """Body for date-range filters."""
    start_date: Optional[str] = Field(default=None, alias="startDate", examples=["2023-01-01"])
    end_date: Optional[str] = Field(default=None, alias="endDate", examples=["2023-12-31"])

    class Config:
        populate_by_name = True

    def require(self) -> tuple[str, str]:
        if not self.start_date or not self.end_date:
            raise ValueError("startDate and endDate are required")
        return self.start_date, self.end_date


class RegionRequest(BaseModel):
    """Bounding box for temperature statistics."""
    lat_min: Optional[float] = Field(default=None, alias="latMin")
    lat_max: Optional[float] = Field(default=None, alias="latMax")
    lon_min: Optional[float] = Field(default=None, alias="lonMin")
    lon_max: Optional[float] = Field(default=None, alias="lonMax")

    class Config:
        populate_by_name = True

    def require(self) -> tuple[float, float, float, float]:
        values = (self.lat_min, self.lat_max, self.lon_min, self.lon_max)
        if any(value is None for value in values):
            raise ValueError("latMin, latMax, lonMin, lonMax are required")
        return values
