from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

UINT64_MAX = 2**64 - 1


class Customer(BaseModel):
    """A customer record.

    Decoding is strict about JSON types; missing keys take their zero value and
    unknown keys are ignored. Encoding drops every field that holds its zero
    value, so `contacted` only appears once a customer has been contacted.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: int = Field(default=0, ge=0, le=UINT64_MAX)
    name: str = ""
    role: str = ""
    email: str = ""
    phone: str = ""
    contacted: bool = False

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


def customers_to_wire(customers: list[Customer]) -> list[dict[str, Any]]:
    return [customer.to_wire() for customer in customers]
