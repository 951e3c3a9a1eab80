from concurrent.futures import ThreadPoolExecutor

import pytest

from customer_api.models.schemas import Customer
from customer_api.services.customer_store import (
    SEED_CUSTOMERS,
    CustomerStore,
    InvalidCustomerIdError,
    parse_customer_id,
)


def test_store_starts_with_seed_customers() -> None:
    store = CustomerStore()
    assert [c.id for c in store.list_all()] == [1, 2, 3]
    assert store.get(1).name == "John Doe"
    assert store.get(99) is None


def test_insert_only_when_absent() -> None:
    store = CustomerStore()
    assert store.insert(Customer(id=4, name="New")) is True
    assert store.insert(Customer(id=4, name="Other")) is False
    assert store.get(4).name == "New"


def test_replace_only_when_present() -> None:
    store = CustomerStore()
    assert store.replace(Customer(id=9, name="Nobody")) is False
    assert store.get(9) is None

    assert store.replace(Customer(id=1, name="Renamed")) is True
    assert store.get(1) == Customer(id=1, name="Renamed")


def test_delete_and_reset() -> None:
    store = CustomerStore()
    assert store.delete(2) is True
    assert store.delete(2) is False
    assert [c.id for c in store.list_all()] == [1, 3]

    store.reset()
    assert store.list_all() == list(SEED_CUSTOMERS)


def test_concurrent_inserts_keep_ids_unique() -> None:
    store = CustomerStore(seed=())

    def _insert(i: int) -> bool:
        return store.insert(Customer(id=(i % 50) + 1, name=f"c{i}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_insert, range(400)))

    assert sum(results) == 50
    assert [c.id for c in store.list_all()] == list(range(1, 51))


def test_parse_customer_id_accepts_plain_digits() -> None:
    assert parse_customer_id("0") == 0
    assert parse_customer_id("42") == 42
    assert parse_customer_id("18446744073709551615") == 2**64 - 1
    assert parse_customer_id("0007") == 7
    assert parse_customer_id("0" * 5000 + "42") == 42


@pytest.mark.parametrize("raw", ["", "abc", "-1", "+1", " 1", "1.0", "1_000", "18446744073709551616"])
def test_parse_customer_id_rejects_invalid_input(raw: str) -> None:
    with pytest.raises(InvalidCustomerIdError) as exc_info:
        parse_customer_id(raw)
    assert str(exc_info.value).startswith(f"Failed to parse the given id: {raw}.")


def test_customer_wire_format_omits_zero_values() -> None:
    assert Customer(id=5, name="A").to_wire() == {"id": 5, "name": "A"}
    assert Customer(id=5, contacted=True).to_wire() == {"id": 5, "contacted": True}
    assert Customer().to_wire() == {}


def test_customer_decoding_is_strict_and_ignores_unknown_keys() -> None:
    customer = Customer.model_validate_json(b'{"id": 7, "name": "B", "nickname": "bee"}')
    assert customer == Customer(id=7, name="B")

    with pytest.raises(ValueError):
        Customer.model_validate_json(b'{"id": "7"}')
    with pytest.raises(ValueError):
        Customer.model_validate_json(b'{"id": -7}')


def test_parse_customer_id_rejects_very_long_digit_strings() -> None:
    raw = "1" * 5000
    with pytest.raises(InvalidCustomerIdError) as exc_info:
        parse_customer_id(raw)
    assert exc_info.value.reason.startswith("Value out of range")
