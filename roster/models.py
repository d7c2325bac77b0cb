from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .dates import add_years


class MemberRecord(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    first_name: str
    last_name: str
    email: str
    join_date: date

    @computed_field
    @property
    def expiration_date(self) -> date:
        return add_years(self.join_date)


class MembersResponse(BaseModel):
    count: int = 0
    members: List[MemberRecord] = Field(default_factory=list)


class WalletCardRequest(BaseModel):
    first_name: str = Field(default="", examples=["Ann"])
    last_name: str = Field(default="", examples=["Lee"])
    expiration_date: str = Field(default="", examples=["2024-03-15"])


class HealthResponse(BaseModel):
    ok: bool = True
