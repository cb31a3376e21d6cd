from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import admin, bookings, sessions, views
from app.core.dependencies import booking_snapshot
from app.core.errors import StoreUnavailable
from app.core.events import notifier

# ⭐ Import logging system
from app.core.logging_config import get_logger

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Snapshot follows every write, local or from other workers
    booking_snapshot.attach(notifier)
    notifier.start_relay()
    if booking_snapshot.refresh():
        logger.info(f"Loaded {len(booking_snapshot.bookings)} bookings")
    yield
    notifier.stop_relay()
    booking_snapshot.detach()


app = FastAPI(
    title="Padelist Booking API",
    version="1.0.0",
    description="Weekly padel sessions at The Padelist Achrafieh: sessions, bookings & club console",
    lifespan=lifespan,
)

# ⭐ Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request, exc: StoreUnavailable):
    logger.error(f"STORE UNAVAILABLE: {request.url} -> {exc.message}")
    return JSONResponse(status_code=503, content={"detail": exc.message})


# ⭐ CORS (the booking front end is served separately)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS --------
app.include_router(sessions.router)
app.include_router(bookings.router)
app.include_router(admin.router)
app.include_router(views.router)

@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
