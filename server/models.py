# models.py
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

RunType = Literal["pickup", "dropoff"]
RunStatus = Literal["scheduled", "cancelled"]


class ParsedRun(BaseModel):
    id: str = Field(..., description="Source run ID or synthesized run-<index>")
    time: str = Field("", description="HH:MM AM|PM, ASAP, or the raw text when unparseable")
    flight_number: str = ""
    airline: str = ""
    departure_airport: str = ""
    arrival_airport: str = ""
    pickup_location: str = ""
    dropoff_location: str = ""
    type: RunType
    passenger_info: str = ""
    passenger_count: str = ""
    price: str = ""
    cancelled: bool = False
    notes: str = ""

    @field_validator("flight_number")
    @classmethod
    def _clean_flight_number(cls, v: str) -> str:
        return v.upper() if v else v


class ParseResult(BaseModel):
    success: bool = False
    runs: List[ParsedRun] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _derive_success(self) -> "ParseResult":
        # Partial success is success: any run at all wins over any error count
        self.success = len(self.runs) > 0
        return self


class RunFormRecord(BaseModel):
    """Same shape the manual "add run" form submits to the run-creation API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    flight_number: str = ""
    airline: str = ""
    departure: str = ""
    arrival: str = ""
    pickup_location: str = ""
    dropoff_location: str = ""
    scheduled_time: str = Field("", description="YYYY-MM-DDTHH:MM local, empty when it needs manual input")
    estimated_duration: int = 60
    type: RunType
    price: str = ""
    notes: str = ""
    status: RunStatus = "scheduled"

    def to_api_payload(self) -> dict:
        return self.model_dump(by_alias=True)
