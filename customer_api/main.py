from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from customer_api.api.customers import CustomerRequestError, customer_request_error_handler
from customer_api.api.customers import router as customers_router
from customer_api.api.metrics import router as metrics_router
from customer_api.config import get_settings
from customer_api.observability.logging import configure_logging
from customer_api.observability.middleware import RequestContextMiddleware


app = FastAPI(title="Customer API", version="0.1.0")
app.add_middleware(RequestContextMiddleware)
app.add_exception_handler(CustomerRequestError, customer_request_error_handler)
app.include_router(customers_router)
app.include_router(metrics_router)
app.mount("/static", StaticFiles(directory=get_settings().static_path, check_dir=False), name="static")


@app.on_event("startup")
def _startup() -> None:
    configure_logging(get_settings().log_level)


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    page = get_settings().static_path / "index.html"
    if not page.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(page, media_type="text/html")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
