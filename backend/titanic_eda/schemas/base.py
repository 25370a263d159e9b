# backend/titanic_eda/schemas/base.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel


class APIResponse(BaseModel):
    """Envelope for plain acknowledgements such as a session reset."""
    ok: bool = True
    message: Optional[str] = None
