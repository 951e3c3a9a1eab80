from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from customer_api.models.schemas import Customer, customers_to_wire
from customer_api.observability.metrics import get_metrics
from customer_api.services.customer_store import (
    CustomerStore,
    InvalidCustomerIdError,
    get_customer_store,
    parse_customer_id,
)

router = APIRouter(tags=["customers"])

logger = logging.getLogger(__name__)


class CustomerRequestError(Exception):
    """A rejected customer request, rendered as a bare JSON string body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def customer_request_error_handler(request: Request, exc: CustomerRequestError) -> JSONResponse:
    _ = request
    return JSONResponse(content=exc.message, status_code=exc.status_code)


def _not_found(raw_id: str) -> CustomerRequestError:
    return CustomerRequestError(status.HTTP_404_NOT_FOUND, f"Customer with id: {raw_id} not found.")


def _path_id(raw_id: str) -> int:
    try:
        return parse_customer_id(raw_id)
    except InvalidCustomerIdError as exc:
        raise CustomerRequestError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def _customer_from_body(request: Request) -> Customer:
    try:
        body = await request.body()
    except ClientDisconnect as exc:
        raise CustomerRequestError(
            status.HTTP_400_BAD_REQUEST,
            "Failed to read customer data from the request body. Client disconnected.",
        ) from exc

    try:
        return Customer.model_validate_json(body)
    except ValidationError as exc:
        raise CustomerRequestError(
            status.HTTP_400_BAD_REQUEST,
            f"Failed to read customer data from the request body. {_describe_validation_error(exc)}",
        ) from exc


def _list_response(store: CustomerStore, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=customers_to_wire(store.list_all()), status_code=status_code)


@router.get("/customers")
async def get_customers(store: CustomerStore = Depends(get_customer_store)) -> JSONResponse:
    return _list_response(store)


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: str, store: CustomerStore = Depends(get_customer_store)) -> JSONResponse:
    customer = store.get(_path_id(customer_id))
    if customer is None:
        raise _not_found(customer_id)
    return JSONResponse(content=customer.to_wire())


@router.post("/customers")
async def add_customer(request: Request, store: CustomerStore = Depends(get_customer_store)) -> JSONResponse:
    customer = await _customer_from_body(request)
    if customer.id == 0:
        raise CustomerRequestError(
            status.HTTP_400_BAD_REQUEST,
            "Invalid customer id 0. Customer id should be greater than 0.",
        )

    # Conflict and success both answer with the current table.
    if not store.insert(customer):
        logger.info("customer.conflict", extra={"customer_id": customer.id})
        return _list_response(store, status.HTTP_409_CONFLICT)

    get_metrics().observe_customer_mutation("create")
    logger.info("customer.created", extra={"customer_id": customer.id})
    return _list_response(store, status.HTTP_201_CREATED)


@router.put("/customers/{customer_id}")
async def update_customer(
    customer_id: str,
    request: Request,
    store: CustomerStore = Depends(get_customer_store),
) -> JSONResponse:
    path_id = _path_id(customer_id)
    customer = await _customer_from_body(request)
    if customer.id != path_id:
        raise CustomerRequestError(
            status.HTTP_400_BAD_REQUEST,
            "Customer id in the request body does not match the id in the URL path.",
        )
    if not store.replace(customer):
        raise _not_found(customer_id)

    get_metrics().observe_customer_mutation("update")
    logger.info("customer.updated", extra={"customer_id": path_id})
    return _list_response(store)


@router.delete("/customers/{customer_id}")
async def delete_customer(customer_id: str, store: CustomerStore = Depends(get_customer_store)) -> JSONResponse:
    path_id = _path_id(customer_id)
    if not store.delete(path_id):
        raise _not_found(customer_id)

    get_metrics().observe_customer_mutation("delete")
    logger.info("customer.deleted", extra={"customer_id": path_id})
    return _list_response(store)
