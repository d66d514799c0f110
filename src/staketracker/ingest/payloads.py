"""Reconcile the two accepted ingestion payload shapes into one CashoutRecord.

Nested (userscript)::

    {"minesCashout": {"id": ..., "currency": "ltc", "amount": ..., ...},
     "user": {"id": ..., "name": ...}}

Flat (compatibility)::

    {"id": ..., "accountId": ..., "accountName": ..., "currency": "ltc", ...}
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from staketracker.domain.models.cashout import CashoutRecord
from staketracker.exceptions import IngestValidationError
from staketracker.stats.normalizer import to_number


def _clean_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError("id must be a string or number")
    value = value.strip()
    return value or None


def _clean_label(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def _clean_usd(value: Any) -> Optional[float]:
    """Client USD is optional; anything non-numeric or negative is dropped."""
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


class _CashoutFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[str] = None
    game: Optional[str] = None
    currency: Optional[str] = None
    amount: float = 0.0
    payout: float = 0.0
    amount_multiplier: float = 0.0
    payout_multiplier: float = 0.0
    amount_usd: Optional[float] = Field(None, alias="amountUSD")
    payout_usd: Optional[float] = Field(None, alias="payoutUSD")
    updated_at: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def clean_id(cls, v: Any) -> Optional[str]:
        return _clean_id(v)

    @field_validator("game", "currency", mode="before")
    @classmethod
    def lowercase(cls, v: Any) -> Optional[str]:
        return _clean_label(v)

    @field_validator("amount", "payout", "amount_multiplier", "payout_multiplier", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        return to_number(v)

    @field_validator("amount_usd", "payout_usd", mode="before")
    @classmethod
    def coerce_usd(cls, v: Any) -> Optional[float]:
        return _clean_usd(v)

    @field_validator("updated_at", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


class NestedUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def clean_id(cls, v: Any) -> Optional[str]:
        return _clean_id(v)

    @field_validator("name", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


class NestedCashoutPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    mines_cashout: Optional[_CashoutFields] = Field(None, alias="minesCashout")
    user: Optional[NestedUser] = None
    amount_usd: Optional[float] = Field(None, alias="amountUSD")
    payout_usd: Optional[float] = Field(None, alias="payoutUSD")

    @field_validator("amount_usd", "payout_usd", mode="before")
    @classmethod
    def coerce_usd(cls, v: Any) -> Optional[float]:
        return _clean_usd(v)


class FlatCashoutPayload(_CashoutFields):
    account_id: Optional[str] = None
    account_name: Optional[str] = None

    @field_validator("account_id", mode="before")
    @classmethod
    def clean_account_id(cls, v: Any) -> Optional[str]:
        return _clean_id(v)

    @field_validator("account_name", mode="before")
    @classmethod
    def stringify_name(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


def is_nested(body: dict[str, Any]) -> bool:
    return "minesCashout" in body or "user" in body


def reconcile_payload(body: Any) -> CashoutRecord:
    """Map either payload shape onto a CashoutRecord. Pure; raises IngestValidationError."""
    if not isinstance(body, dict):
        raise IngestValidationError("payload must be a JSON object")

    try:
        if is_nested(body):
            return _from_nested(NestedCashoutPayload.model_validate(body), body)
        return _from_flat(FlatCashoutPayload.model_validate(body), body)
    except ValidationError as exc:
        raise IngestValidationError(f"malformed payload: {exc.errors()[0]['msg']}") from exc


def _from_nested(payload: NestedCashoutPayload, raw: dict[str, Any]) -> CashoutRecord:
    cashout = payload.mines_cashout
    user = payload.user
    if cashout is None or cashout.id is None or user is None or user.id is None:
        raise IngestValidationError("missing minesCashout.id or user.id")

    return CashoutRecord(
        id=cashout.id,
        account_id=user.id,
        account_name=user.name,
        game=cashout.game,
        currency=cashout.currency,
        amount=cashout.amount,
        payout=cashout.payout,
        amount_multiplier=cashout.amount_multiplier,
        payout_multiplier=cashout.payout_multiplier,
        amount_usd=cashout.amount_usd if cashout.amount_usd is not None else payload.amount_usd,
        payout_usd=cashout.payout_usd if cashout.payout_usd is not None else payload.payout_usd,
        updated_at=cashout.updated_at,
        raw=raw,
    )


def _from_flat(payload: FlatCashoutPayload, raw: dict[str, Any]) -> CashoutRecord:
    if payload.id is None or payload.account_id is None:
        raise IngestValidationError("missing id or accountId")

    return CashoutRecord(
        id=payload.id,
        account_id=payload.account_id,
        account_name=payload.account_name,
        game=payload.game,
        currency=payload.currency,
        amount=payload.amount,
        payout=payload.payout,
        amount_multiplier=payload.amount_multiplier,
        payout_multiplier=payload.payout_multiplier,
        amount_usd=payload.amount_usd,
        payout_usd=payload.payout_usd,
        updated_at=payload.updated_at,
        raw=raw,
    )
