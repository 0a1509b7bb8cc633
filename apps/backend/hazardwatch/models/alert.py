"""
alert.py — Early-warning record handed to the notification channel.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from hazardwatch.models.hazard import GeoPoint


class EarlyWarning(BaseModel):
    id: str
    type: Literal["early_warning"] = "early_warning"
    severity: str
    hazard_type: Optional[str] = None
    location: Optional[GeoPoint] = None
    message: str
    source_report_id: str
    timestamp: datetime
