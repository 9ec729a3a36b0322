"""
API response models using Pydantic.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class LSTResponse(BaseModel):
    """Envelope returned by every /api/lst endpoint."""
    success: bool = Field(
        default=True,
        description="False only on errors, which carry an `error` message instead of data"
    )
    data: Any = Field(
        default=None,
        description="Rows or RPC result proxied from PostgREST"
    )
    count: Optional[int] = Field(
        default=None,
        description="Number of rows in `data`"
    )
    message: Optional[str] = None
    filters: Optional[Dict[str, Any]] = None
    location: Optional[Dict[str, Any]] = None
    radius: Optional[float] = None
    region: Optional[Dict[str, Any]] = None
    band: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": [
                    {
                        "latitude": 48.8566,
                        "longitude": 2.3522,
                        "band": "LST_Day_1km",
                        "value_mean": 295.4,
                        "value_min": 284.1,
                        "value_max": 306.8,
                    }
                ],
                "count": 1,
            }
        }


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
