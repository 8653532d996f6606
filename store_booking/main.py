import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

import uvicorn
from fastapi import FastAPI, Depends, HTTPException, BackgroundTasks, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from . import ingestion, service
from .config import Settings, get_settings
from .database import create_db_and_tables, get_db, engine
from .formatting import upcoming_dates
from .schemas import DateItem, SlotList, StoreStatus
from .time_utils import ZoneMode, get_zone, resolve_display_zone

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles application startup and shutdown events."""
    settings = get_settings()
    logger.info("Store timezone: %s", settings.store_timezone)
    logger.info("Creating database and tables...")
    create_db_and_tables()
    yield
    logger.info("Application shutdown.")

class IngestRequest(BaseModel):
    path: str

class IngestResponse(BaseModel):
    message: str

app = FastAPI(
    title="Store Booking API",
    description="Store open/closed status, next opening time and bookable appointment slots.",
    version="1.0.0",
    lifespan=lifespan,
)

def display_zone(
    zone: ZoneMode = ZoneMode.STORE,
    device_timezone: Optional[str] = None,
    settings: Settings = Depends(get_settings),
) -> ZoneInfo:
    """Turns the zone toggle and the device zone into the zone to display in."""
    try:
        device_tz = get_zone(device_timezone) if device_timezone else None
        return resolve_display_zone(zone, settings.store_tz, device_tz)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

def current_instant(at: Optional[datetime] = None) -> datetime:
    """The request's "now": an explicit ``at`` or the wall clock, read once."""
    if at is None:
        return datetime.now(timezone.utc)
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at

@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "ok"}

def ingest_task(path_str: str):
    """Background task for loading hours and overrides from JSON files."""
    try:
        data_dir = Path(path_str)
        logger.info("Starting background ingestion from: %s", data_dir)
        counts = ingestion.ingest_json_data(engine, data_dir)
        logger.info("Background ingestion finished successfully. Counts: %s", counts)
    except Exception:
        logger.exception("Error during background ingestion from %s", path_str)

@app.post("/ingest", tags=["Data"], response_model=IngestResponse)
def ingest_data(request: IngestRequest, background_tasks: BackgroundTasks):
    """Triggers a background task to load store hours and overrides."""
    data_dir = Path(request.path)
    if not data_dir.is_dir():
        raise HTTPException(status_code=404, detail=f"Directory not found: {request.path}")
    missing = [
        name for name in (ingestion.HOURS_FILE, ingestion.OVERRIDES_FILE)
        if not (data_dir / name).is_file()
    ]
    if missing:
        raise HTTPException(status_code=404, detail=f"Missing files: {', '.join(missing)}")
    background_tasks.add_task(ingest_task, request.path)
    return {"message": "Data ingestion started in the background. Check server logs for progress."}

@app.get("/store/status", tags=["Store"], response_model=StoreStatus)
def get_store_status(
    now: datetime = Depends(current_instant),
    display_tz: ZoneInfo = Depends(display_zone),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    """Whether the store is open right now, and when it opens next if not."""
    return service.store_status(db, now, display_tz, settings.store_tz)

@app.get("/store/slots", tags=["Store"], response_model=SlotList)
def get_store_slots(
    day: date,
    interval_minutes: Optional[int] = Query(default=None, gt=0),
    display_tz: ZoneInfo = Depends(display_zone),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    """Bookable appointment start times for a day, sorted ascending."""
    interval = interval_minutes or settings.slot_interval_minutes
    return service.slot_list(db, day, display_tz, settings.store_tz, interval)

@app.get("/store/dates", tags=["Store"], response_model=List[DateItem])
def get_booking_dates(
    now: datetime = Depends(current_instant),
    display_tz: ZoneInfo = Depends(display_zone),
    settings: Settings = Depends(get_settings),
):
    """The dates a customer can pick from, starting today in the display zone."""
    return upcoming_dates(now, display_tz, settings.date_list_days)

def run():
    """Console entry point: serves the API with uvicorn."""
    uvicorn.run("store_booking.main:app", host="0.0.0.0", port=8000)
