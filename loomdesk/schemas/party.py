# FILE: loomdesk/schemas/party.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from loomdesk.core.config import settings
from loomdesk.schemas.challan import InterestType, coerce_amount
from loomdesk.utils.money import ZERO


class Party(BaseModel):
    """Customer / vendor terms as stored by the party master."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    party_name: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("partyName", "party_name"),
        serialization_alias="partyName")
    payment_terms_days: int = Field(
        settings.DEFAULT_PAYMENT_TERMS_DAYS,
        ge=0,
        validation_alias=AliasChoices("paymentTermsDays",
                                      "payment_terms_days"),
        serialization_alias="paymentTermsDays")
    interest_percent_per_day: Decimal = Field(
        ZERO,
        validation_alias=AliasChoices("interestPercentPerDay",
                                      "interest_percent_per_day"),
        serialization_alias="interestPercentPerDay")
    interest_type: InterestType = Field(
        InterestType.COMPOUND,
        validation_alias=AliasChoices("interestType", "interest_type"),
        serialization_alias="interestType")
    credit_limit: Decimal = Field(
        ZERO,
        validation_alias=AliasChoices("creditLimit", "credit_limit"),
        serialization_alias="creditLimit")
    current_outstanding: Decimal = Field(
        ZERO,
        validation_alias=AliasChoices("currentOutstanding",
                                      "current_outstanding"),
        serialization_alias="currentOutstanding")
    active_status: bool = Field(
        True,
        validation_alias=AliasChoices("activeStatus", "active_status"),
        serialization_alias="activeStatus")

    @field_validator("interest_percent_per_day",
                     "credit_limit",
                     "current_outstanding",
                     mode="before")
    @classmethod
    def _num(cls, v):
        return coerce_amount(v)


class PartyCreditState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    credit_limit: Decimal = Field(ZERO, serialization_alias="creditLimit")
    current_outstanding: Decimal = Field(
        ZERO, serialization_alias="currentOutstanding")
    available_credit: Decimal = Field(ZERO,
                                      serialization_alias="availableCredit")
    display_available: Decimal = Field(
        ZERO, serialization_alias="displayAvailable")
    credit_utilization: Decimal = Field(
        ZERO, serialization_alias="creditUtilization")
    is_near_credit_limit: bool = Field(
        False, serialization_alias="isNearCreditLimit")
    is_over_credit_limit: bool = Field(
        False, serialization_alias="isOverCreditLimit")


class DueDateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("issueDate", "issue_date"))
    payment_terms_days: Optional[int] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("paymentTermsDays",
                                      "payment_terms_days"))
    party: Optional[Party] = None
