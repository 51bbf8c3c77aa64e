from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

# One VEVENT block: uppercase field name -> value, repeats joined by "\n"
RawRecord = Dict[str, str]


@dataclass
class Event:
    title: str = "Untitled"
    description: str = ""
    url: str = ""
    location: str = ""
    poster: Optional[str] = None
    start_raw: Optional[str] = None
    end_raw: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
