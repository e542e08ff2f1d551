"""Request models for the application services."""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..config import config
from ..domain.entities import MaintenanceType, as_datetime
from ..domain.entities.base import now
from ..domain.exceptions import ValidationError


def _error_messages(exc: PydanticValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        message = error["msg"].removeprefix("Value error, ")
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {message}" if location else message)
    return messages


def _parse_date(value, info: ValidationInfo):
    try:
        return as_datetime(value, info.field_name or "date")
    except ValidationError as e:
        raise ValueError(e.message) from None


DateInput = Annotated[datetime, BeforeValidator(_parse_date)]
CurrencyCode = Annotated[str, Field(pattern=r"^[A-Za-z]{3}$"), AfterValidator(str.upper)]


class RequestModel(BaseModel):
    """Base for request payloads; ``parse`` reports every violation as a domain error."""
    model_config = ConfigDict(str_strip_whitespace=True)

    @classmethod
    def parse(cls, data):
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError.from_errors(_error_messages(e)) from None


class CreateRentalRequest(RequestModel):
    equipment_id: UUID = Field(description="Equipment unit being rented.")
    client_company_id: UUID = Field(description="Company taking the unit.")
    provider_company_id: UUID = Field(description="Company owning the unit.")
    start_date: DateInput = Field(description="First day of the contract; today or later.")
    end_date: DateInput = Field(description="Last day of the contract; after start_date.")
    monthly_rate: Decimal = Field(description="Monthly fee, greater than zero.")
    security_deposit: Decimal = Field(default=Decimal("0"), description="Refundable deposit, zero or more.")
    currency: CurrencyCode = Field(default_factory=lambda: config.DEFAULT_CURRENCY)
    payment_terms: Optional[str] = None
    contract_terms: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_date")
    @classmethod
    def start_not_in_past(cls, value: datetime) -> datetime:
        if value.date() < now().date():
            raise ValueError("Start date cannot be in the past")
        return value

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("start_date")
        if start is not None and start >= value:
            raise ValueError("Start date must be before end date")
        return value

    @field_validator("monthly_rate")
    @classmethod
    def rate_positive(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError("Monthly rate must be greater than zero")
        return value

    @field_validator("security_deposit")
    @classmethod
    def deposit_not_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("Security deposit cannot be negative")
        return value


class ScheduleMaintenanceRequest(RequestModel):
    equipment_id: UUID
    maintenance_type: MaintenanceType
    scheduled_date: DateInput
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    estimated_duration_hours: Optional[float] = Field(default=None, gt=0)
    estimated_cost: Optional[Decimal] = Field(default=None, ge=0)
    currency: CurrencyCode = Field(default_factory=lambda: config.DEFAULT_CURRENCY)
    technician_id: Optional[UUID] = None
    service_request_id: Optional[UUID] = None
    # preventive only: days until the following occurrence
    maintenance_interval_days: Optional[int] = Field(default=None, gt=0)

