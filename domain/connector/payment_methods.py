"""
Canonical payment method data.

Card fields are SecretStr so they never show up in repr/log output.
"""
from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class _PaymentMethod(BaseModel):
    model_config = ConfigDict(frozen=True)


class Card(_PaymentMethod):
    kind: Literal["card"] = "card"
    card_number: SecretStr
    card_exp_month: SecretStr
    card_exp_year: SecretStr
    card_holder_name: Optional[SecretStr] = None
    card_cvc: SecretStr


class Wallet(_PaymentMethod):
    kind: Literal["wallet"] = "wallet"
    # google_pay, apple_pay, paypal, ...
    wallet_type: str
    token: Optional[SecretStr] = None


class BankRedirect(_PaymentMethod):
    kind: Literal["bank_redirect"] = "bank_redirect"
    bank_name: Optional[str] = None
    country: Optional[str] = None


class PayLater(_PaymentMethod):
    kind: Literal["pay_later"] = "pay_later"
    provider: str


class Crypto(_PaymentMethod):
    kind: Literal["crypto"] = "crypto"
    network: Optional[str] = None


PaymentMethodData = Annotated[
    Union[Card, Wallet, BankRedirect, PayLater, Crypto],
    Field(discriminator="kind"),
]
