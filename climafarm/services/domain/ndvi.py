"""
Domain service: NDVI vegetation health status.
"""
import math
from typing import Optional

from climafarm.domain.models import NDVIStatus

HEALTHY_THRESHOLD = 0.2


def ndvi_status(value: Optional[float]) -> NDVIStatus:
    """
    Classify a single NDVI value.

    Args:
        value: NDVI scalar, expected in [-1, 1]

    Returns:
        NDVIStatus with OK (green) for [0.2, 1], KO (red) below 0.2,
        and unknown (gray) for missing or out-of-range values
    """
    if value is None or not math.isfinite(value) or value < -1 or value > 1:
        return NDVIStatus(
            value=value if value is not None and math.isfinite(value) else None,
            status="unknown",
            color="gray",
            description="NDVI value unavailable or outside the valid range [-1, 1]",
        )

    if value < HEALTHY_THRESHOLD:
        return NDVIStatus(
            value=value,
            status="KO",
            color="red",
            description="Sparse or stressed vegetation, bare soil or water",
        )

    return NDVIStatus(
        value=value,
        status="OK",
        color="green",
        description="Healthy, actively growing vegetation",
    )
