from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    tags: list[str] = Field(default_factory=list)
    description: str = ""


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str = Field(..., min_length=1)
    purposes: list[str] = Field(..., min_length=1)
    include_reviews: bool = False
    additional_info: str = ""


class RecommendedPlace(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_name: str = Field(..., min_length=1, alias="placeName")
    description: str = ""
    map_url: str = Field(default="", alias="googleMapsUrl")
    highlights: list[str] = Field(default_factory=list)
    latitude: float
    longitude: float
    review_url: str | None = Field(default=None, alias="reviewUrl")
    distance: str | None = None


class Recommendation(BaseModel):
    places: list[RecommendedPlace] = Field(default_factory=list)


class VerificationResult(BaseModel):
    valid: bool
    corrected_name: str
    error: str | None = None


class PlaceDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    opening_hours: str = Field(default="", alias="openingHours")
    popular_amenities: list[str] = Field(default_factory=list, alias="popularAmenities")
    popular_dishes: list[str] = Field(default_factory=list, alias="popularDishes")


class SessionPhase(str, Enum):
    no_request = "no_request"
    requested = "requested"
    accumulating = "accumulating"


# ── API bodies ───────────────────────────────────────────────────────────


class DestinationBody(BaseModel):
    destination: str = Field(..., max_length=200)


class SubmitBody(BaseModel):
    purposes: list[str] = Field(default_factory=list)
    custom_purpose: str = ""
    include_reviews: bool = False
    additional_info: str = Field(default="", max_length=1000)


class PlaceDetailsBody(BaseModel):
    place_name: str = Field(..., min_length=1)


class PlaceQuestionBody(BaseModel):
    place_name: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1, max_length=500)


class SessionSummary(BaseModel):
    phase: SessionPhase
    is_busy: bool
    profile: UserProfile | None = None
    destination_input: str = ""
    verified_destination: str | None = None
    suggested_purposes: list[str] = Field(default_factory=list)
    last_request: RecommendationRequest | None = None
    places: list[RecommendedPlace] = Field(default_factory=list)


class ResultsResponse(BaseModel):
    destination: str
    purposes: list[str]
    places: list[RecommendedPlace]
    added: int
