# app/schemas/buyer.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class City(str, Enum):
    CHANDIGARH = "Chandigarh"
    MOHALI = "Mohali"
    ZIRAKPUR = "Zirakpur"
    PANCHKULA = "Panchkula"
    OTHER = "Other"


class PropertyType(str, Enum):
    APARTMENT = "Apartment"
    VILLA = "Villa"
    PLOT = "Plot"
    OFFICE = "Office"
    RETAIL = "Retail"


class BHK(str, Enum):
    STUDIO = "Studio"
    ONE = "One"
    TWO = "Two"
    THREE = "Three"
    FOUR = "Four"


class Purpose(str, Enum):
    BUY = "Buy"
    RENT = "Rent"


class Timeline(str, Enum):
    ZERO_TO_3M = "ZeroTo3m"
    THREE_TO_6M = "ThreeTo6m"
    MORE_THAN_6M = "MoreThan6m"
    EXPLORING = "Exploring"


class Source(str, Enum):
    WEBSITE = "Website"
    REFERRAL = "Referral"
    WALK_IN = "WalkIn"
    CALL = "Call"
    OTHER = "Other"


class Status(str, Enum):
    NEW = "New"
    QUALIFIED = "Qualified"
    CONTACTED = "Contacted"
    VISITED = "Visited"
    NEGOTIATION = "Negotiation"
    CONVERTED = "Converted"
    DROPPED = "Dropped"


# Property types that only make sense with a BHK configuration
RESIDENTIAL_TYPES = {PropertyType.APARTMENT.value, PropertyType.VILLA.value}

# Canonical column order, shared by import previews and exports
CSV_HEADERS = [
    "fullName",
    "email",
    "phone",
    "city",
    "propertyType",
    "bhk",
    "purpose",
    "budgetMin",
    "budgetMax",
    "timeline",
    "source",
    "notes",
    "tags",
    "status",
]

# Columns an import file must carry; the rest are optional
REQUIRED_HEADERS = [
    "fullName",
    "phone",
    "city",
    "propertyType",
    "purpose",
    "timeline",
    "source",
]

# Every field a normalized row carries (ownerId never comes from the file)
CANONICAL_FIELDS = CSV_HEADERS + ["ownerId"]


class BuyerRecord(BaseModel):
    """
    Wire/storage shape of one confirmed buyer lead.
    Accepts the camelCase keys produced by the import preview and exposes
    snake_case attributes matching the Buyer ORM model.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    full_name: str = Field(..., alias="fullName")
    email: Optional[str] = None
    phone: str
    city: City
    property_type: PropertyType = Field(..., alias="propertyType")
    bhk: Optional[BHK] = None
    purpose: Purpose
    budget_min: Optional[float] = Field(None, alias="budgetMin")
    budget_max: Optional[float] = Field(None, alias="budgetMax")
    timeline: Timeline
    source: Source
    notes: Optional[str] = None
    tags: List[str] = []
    status: Status = Status.NEW

    @field_validator("email", "bhk", "notes", "budget_min", "budget_max", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_empty_list(cls, v):
        return [] if v is None else v
