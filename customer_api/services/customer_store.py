from __future__ import annotations

import re
from threading import Lock

from customer_api.models.schemas import UINT64_MAX, Customer

_DIGITS = re.compile(r"[0-9]+")
_UINT64_DIGITS = len(str(UINT64_MAX))

SEED_CUSTOMERS: tuple[Customer, ...] = (
    Customer(id=1, name="John Doe", role="Admin", email="john.doe@gmail.com", phone="1234567890"),
    Customer(id=2, name="Jane Doe", role="User", email="jane.doe@gmail.com", phone="0987654321"),
    Customer(id=3, name="John Smith", role="User", email="john.smith@gmail.com", phone="1234567890"),
)


class InvalidCustomerIdError(ValueError):
    """Raised when a path id is not a base-10 unsigned 64-bit integer."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Failed to parse the given id: {raw}. {reason}")
        self.raw = raw
        self.reason = reason


def parse_customer_id(raw: str) -> int:
    if not _DIGITS.fullmatch(raw):
        raise InvalidCustomerIdError(raw, "Expected a base-10 unsigned integer.")
    # Leading zeros are allowed; more significant digits than UINT64_MAX cannot fit.
    digits = raw.lstrip("0") or "0"
    if len(digits) > _UINT64_DIGITS or int(digits) > UINT64_MAX:
        raise InvalidCustomerIdError(raw, f"Value out of range, must not exceed {UINT64_MAX}.")
    return int(digits)


class CustomerStore:
    """Thread-safe in-memory customer table (resets on restart).

    Records are frozen models, so callers can hold on to what they read while
    other requests replace or delete entries.
    """

    def __init__(self, seed: tuple[Customer, ...] = SEED_CUSTOMERS) -> None:
        self._lock = Lock()
        self._seed = seed
        self._customers: dict[int, Customer] = {c.id: c for c in seed}

    def list_all(self) -> list[Customer]:
        with self._lock:
            return [self._customers[k] for k in sorted(self._customers)]

    def get(self, customer_id: int) -> Customer | None:
        with self._lock:
            return self._customers.get(customer_id)

    def insert(self, customer: Customer) -> bool:
        with self._lock:
            if customer.id in self._customers:
                return False
            self._customers[customer.id] = customer
            return True

    def replace(self, customer: Customer) -> bool:
        with self._lock:
            if customer.id not in self._customers:
                return False
            self._customers[customer.id] = customer
            return True

    def delete(self, customer_id: int) -> bool:
        with self._lock:
            return self._customers.pop(customer_id, None) is not None

    def reset(self) -> None:
        with self._lock:
            self._customers = {c.id: c for c in self._seed}


_STORE: CustomerStore | None = None


def get_customer_store() -> CustomerStore:
    global _STORE
    if _STORE is None:
        _STORE = CustomerStore()
    return _STORE


def reset_customer_store() -> None:
    """Restore the seed customers (used by tests)."""

    get_customer_store().reset()
