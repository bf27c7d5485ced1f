from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class Advocate(BaseModel):
    """One advocate profile as served by the advocates API.

    Built from payloads with ``from_payload`` which skips validation, so
    fields may hold whatever the API sent.
    """

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    city: str = Field(default="", alias="city")
    degree: str = Field(default="", alias="degree")
    specialties: List[str] = Field(default_factory=list, alias="specialties")
    years_of_experience: int | None = Field(default=None, alias="yearsOfExperience")
    phone_number: int | None = Field(default=None, alias="phoneNumber")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @classmethod
    def from_payload(cls, raw: Any) -> "Advocate":
        if not isinstance(raw, Mapping):
            return cls.model_construct()
        values = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if key in raw:
                values[name] = raw[key]
        return cls.model_construct(**values)

    @property
    def row_key(self) -> str:
        return f"{self.first_name}-{self.last_name}-{self.phone_number}"

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, warnings=False)
