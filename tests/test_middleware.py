import pytest

from customer_api.observability.middleware import route_label


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/customers", ("/customers", None)),
        ("/customers/42", ("/customers/{id}", "42")),
        ("/customers/abc", ("/customers/{id}", "abc")),
        ("/customers/1/orders", ("unmatched", None)),
        ("/customers/", ("unmatched", None)),
        ("/", ("/", None)),
        ("/metrics", ("/metrics", None)),
        ("/static/index.html", ("/static", None)),
        ("/api/customers/1", ("unmatched", None)),
    ],
)
def test_route_label_collapses_customer_ids(path: str, expected: tuple) -> None:
    assert route_label(path) == expected


async def test_request_id_differs_per_request(api_client) -> None:
    first = await api_client.get("/customers/1")
    second = await api_client.get("/customers/1")
    assert first.headers["x-request-id"] != second.headers["x-request-id"]
