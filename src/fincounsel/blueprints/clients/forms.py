"""Client profile payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.client import ChildDependent, Client
from ..common import OptionalDate


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"


class ChildPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", max_length=120)
    date_of_birth: OptionalDate = None

    def to_model(self) -> ChildDependent:
        return ChildDependent(name=self.name, date_of_birth=self.date_of_birth)


class ClientUpdate(BaseModel):
    """Partial client profile; only the fields sent are applied."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    first_name: Optional[str] = Field(default=None, max_length=80)
    last_name: Optional[str] = Field(default=None, max_length=80)
    email: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=40)
    address: str = Field(default="", max_length=255)
    city: str = Field(default="", max_length=80)
    state: str = Field(default="", max_length=40)
    zip_code: str = Field(default="", max_length=20)
    date_of_birth: OptionalDate = None
    occupation: str = Field(default="", max_length=120)
    employer: str = Field(default="", max_length=120)
    marital_status: MaritalStatus = MaritalStatus.SINGLE

    spouse_first_name: str = Field(default="", max_length=80)
    spouse_last_name: str = Field(default="", max_length=80)
    spouse_date_of_birth: OptionalDate = None
    spouse_occupation: str = Field(default="", max_length=120)
    spouse_employer: str = Field(default="", max_length=120)
    spouse_phone: str = Field(default="", max_length=40)
    spouse_email: str = Field(default="", max_length=255)

    children: Optional[list[ChildPayload]] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError("Please provide a name.")
        return value

    @field_validator("email", "spouse_email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if value and ("@" not in value or value.startswith("@") or value.endswith("@")):
            raise ValueError("Enter a valid email address.")
        return value

    @field_validator("marital_status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or MaritalStatus.SINGLE.value
        return value

    def changes(self) -> dict[str, Any]:
        """Column values explicitly provided by the caller."""

        data = self.model_dump(exclude_unset=True, exclude={"children"})
        if "marital_status" in data:
            data["marital_status"] = self.marital_status.value
        return data

    def child_models(self) -> Optional[list[ChildDependent]]:
        if self.children is None:
            return None
        return [child.to_model() for child in self.children]


class ClientCreate(ClientUpdate):
    first_name: str = Field(max_length=80)
    last_name: str = Field(max_length=80)

    def to_model(self) -> Client:
        return Client(**self.changes())


__all__ = ["ChildPayload", "ClientCreate", "ClientUpdate", "MaritalStatus"]
