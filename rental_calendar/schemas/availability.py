import datetime as dt
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rental_calendar.domain.availability import UnavailableInterval
from rental_calendar.utils.dates import parse_api_date


class UnavailableDatePayload(BaseModel):
    """One entry of all_unavailable_dates / unavailable_dates"""

    start_date: dt.date
    end_date: dt.date
    booking_type: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        return parse_api_date(value)

    @model_validator(mode="after")
    def _ordered(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date is before start_date")
        return self

    def to_interval(self) -> UnavailableInterval:
        return UnavailableInterval(
            start_date=self.start_date,
            end_date=self.end_date,
            booking_type=self.booking_type or "unknown",
        )


class AvailabilityQuote(BaseModel):
    """Price quote returned by check_availability for a concrete stay"""

    model_config = ConfigDict(extra="ignore")

    available: bool = False
    nights: int = 0
    base_price: Decimal = Decimal("0")
    cleaning_fee: Decimal = Decimal("0")
    service_fee: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")

    @field_validator(
        "nights",
        "base_price",
        "cleaning_fee",
        "service_fee",
        "discount_amount",
        "total_price",
        mode="before",
    )
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value


# -------------------------------------------------
# HTTP surface
# -------------------------------------------------


class IntervalOut(BaseModel):
    start_date: dt.date
    end_date: dt.date
    booking_type: str


class CalendarDayOut(BaseModel):
    date: dt.date
    is_current_month: bool
    is_past: bool
    is_today: bool
    is_unavailable: bool
    is_selected: bool
    is_selection_start: bool
    is_selection_end: bool
    is_hovering: bool
    is_clickable: bool


class CalendarMonthOut(BaseModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", examples=["2024-06"])
    title: str
    weeks: list[list[CalendarDayOut]]
    available_count: int = Field(..., ge=0)


class CalendarResponse(BaseModel):
    property_id: str
    today: dt.date
    months: list[CalendarMonthOut]
    unavailable_dates: list[IntervalOut]
    error: Optional[str] = None


class SelectionStateSchema(BaseModel):
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    hover_date: Optional[dt.date] = None
    is_selecting_end: bool = False


class SelectionEventIn(BaseModel):
    type: Literal["click", "hover", "clear_hover", "reset"]
    date: Optional[dt.date] = None

    @model_validator(mode="after")
    def _date_required(self):
        if self.type in ("click", "hover") and self.date is None:
            raise ValueError(f"'{self.type}' event needs a date")
        return self


class SelectionRequest(BaseModel):
    state: SelectionStateSchema = Field(default_factory=SelectionStateSchema)
    event: SelectionEventIn


class DateRangeOut(BaseModel):
    start_date: dt.date
    end_date: dt.date
    nights: int


class RangeErrorOut(BaseModel):
    message: str
    start_date: dt.date
    end_date: dt.date
    conflict_date: dt.date


class SelectionResponse(BaseModel):
    state: SelectionStateSchema
    committed: Optional[DateRangeOut] = None
    error: Optional[RangeErrorOut] = None
    load_error: Optional[str] = None
