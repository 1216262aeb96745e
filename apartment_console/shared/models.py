"""
Shared data models used across modules.

These mirror the JSON records exchanged with the remote API. Field names
use the API spelling as aliases so payloads can be validated as-is, while
Python code works with snake_case attributes.
"""

from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


T = TypeVar("T")

API_MODEL_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


class UserSummary(BaseModel):
    """User as embedded inside a share record."""

    model_config = API_MODEL_CONFIG

    id: int = Field(..., description="User ID")
    name: Optional[str] = None
    surname: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.name or ''} {self.surname or ''}".strip()


class ApartmentSummary(BaseModel):
    """Apartment as embedded inside a share record."""

    model_config = API_MODEL_CONFIG

    id: int = Field(..., description="Apartment ID")
    name: Optional[str] = None


class Share(BaseModel):
    """
    Ownership share ("udzial") linking one user to one apartment.

    Depending on the endpoint the share embeds the user (apartment view)
    or the apartment (user view), never necessarily both.
    """

    model_config = API_MODEL_CONFIG

    id: Optional[int] = None
    procent: Decimal = Field(default=Decimal("0"), description="Percentage 0-100")
    user: Optional[UserSummary] = None
    apartment: Optional[ApartmentSummary] = None

    @field_validator("procent", mode="before")
    @classmethod
    def _null_procent(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value


class Apartment(BaseModel):
    """Apartment record."""

    model_config = API_MODEL_CONFIG

    id: Optional[int] = None
    name: str = ""
    price_for_clean: Optional[Union[float, str]] = Field(None, alias="priceForClean")
    vat: Optional[Union[float, str]] = None
    can_faktura: bool = Field(default=False, alias="canFaktura")
    picture: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    udzialy: list[Share] = Field(default_factory=list)

    # Only populated for the non-admin dashboard (share of the current user)
    user_percentage: Optional[Decimal] = Field(None, alias="userPercentage")

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("can_faktura", mode="before")
    @classmethod
    def _null_flag(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("udzialy", mode="before")
    @classmethod
    def _null_shares(cls, value: Any) -> Any:
        return [] if value is None else value


class InvoiceInfo(BaseModel):
    """Invoicing profile of a user."""

    model_config = API_MODEL_CONFIG

    country: Optional[str] = None
    city: Optional[str] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    nip: Optional[str] = Field(None, description="Tax identification number")
    address: Optional[str] = None
    email: Optional[str] = Field(None, description="Invoice e-mail")


class User(BaseModel):
    """User record including the optional invoicing profile."""

    model_config = API_MODEL_CONFIG

    id: Optional[int] = None
    name: str = ""
    surname: str = ""
    email: str = ""
    username: str = ""
    phone: Optional[str] = None
    roles: list[str] = Field(default_factory=list)
    created_at: Optional[str] = Field(None, alias="createdAt")

    invoice_info: Optional[InvoiceInfo] = Field(None, alias="invoiceInfo")

    udzialy: list[Share] = Field(default_factory=list)

    # The API sends null for fields a user never filled in
    @field_validator("name", "surname", "email", "username", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("roles", "udzialy", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @property
    def apartment_names(self) -> list[str]:
        """Names of apartments this user holds shares in."""
        return [
            share.apartment.name
            for share in self.udzialy
            if share.apartment is not None and share.apartment.name
        ]


class TokenPair(BaseModel):
    """Access token plus (rotated) refresh token returned by the API."""

    model_config = API_MODEL_CONFIG

    token: str
    refresh_token: Optional[str] = None


class Page(BaseModel, Generic[T]):
    """A page of a collection endpoint."""

    items: list[T] = Field(default_factory=list)
    total_items: int = 0


def parse_collection(data: Any) -> Page[dict]:
    """
    Normalize a collection response.

    List endpoints answer either with a hydra envelope
    ({"hydra:member": [...], "hydra:totalItems": N}) or with a bare array.
    Anything else is treated as an empty collection.
    """
    if isinstance(data, list):
        return Page[dict](items=data, total_items=len(data))
    if isinstance(data, dict) and "hydra:member" in data:
        members = data.get("hydra:member") or []
        total = data.get("hydra:totalItems")
        return Page[dict](
            items=members,
            total_items=total if isinstance(total, int) else len(members),
        )
    return Page[dict](items=[], total_items=0)
