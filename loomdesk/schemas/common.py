# FILE: loomdesk/schemas/common.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class FormatCurrencyIn(BaseModel):
    value: Any = None
    symbol: Optional[str] = None
