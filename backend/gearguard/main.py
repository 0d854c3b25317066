from contextlib import asynccontextmanager
from fastapi import FastAPI, Response, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import os
import time
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from . import schemas
from .database import Base, DATABASE_URL, engine
from .routes import (
    users,
    departments,
    teams,
    equipment,
    requests,
    admin,
    reports,
)


dsn = os.getenv("SENTRY_DSN")
if dsn:
    sentry_sdk.init(dsn=dsn, integrations=[FastApiIntegration()])

REQUEST_COUNT = Counter("request_count", "Total requests", ["method", "endpoint"])
REQUEST_LATENCY = Histogram(
    "request_latency_seconds", "Request latency", ["endpoint"]
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # migrations own the schema everywhere except local sqlite files
    if DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="GearGuard API", lifespan=lifespan)

cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

limiter = Limiter(key_func=get_remote_address, default_limits=["120/minute"])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, lambda r, e: Response("Too Many Requests", status_code=429))
if os.getenv("TESTING") != "1":
    app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    endpoint = request.url.path
    REQUEST_COUNT.labels(request.method, endpoint).inc()
    REQUEST_LATENCY.labels(endpoint).observe(time.time() - start)
    return response

@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

API_ROUTERS = [
    users.router,
    departments.router,
    teams.router,
    equipment.router,
    requests.router,
    admin.router,
    reports.router,
]
for router in API_ROUTERS:
    app.include_router(router)


def _api_routes(routes):
    from fastapi.routing import APIRoute

    for route in routes:
        if isinstance(route, APIRoute):
            yield route
        elif isinstance(getattr(route, "routes", None), list):
            yield from _api_routes(route.routes)


def audit_routes(routers=None):
    """Fail fast when an /api route does not answer with the data envelope."""
    for route in _api_routes(r for router in (routers or API_ROUTERS) for r in router.routes):
        if not route.path.startswith("/api"):
            continue
        if route.status_code == 204:
            continue
        model = route.response_model
        if not (isinstance(model, type) and issubclass(model, schemas.DataEnvelope)):
            raise RuntimeError(f"Route {route.path} missing data envelope")


audit_routes()
