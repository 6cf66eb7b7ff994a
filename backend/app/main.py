import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.tracking import router as tracking_router
from app.api.hikes import router as hikes_router
from app.api.preferences import router as preferences_router
from app.db import Base, engine
from app.models.kv_entry import KeyValueEntry  # noqa: F401  (import ensures table is registered)
from app.core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Hiking Companion")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app.include_router(tracking_router)
app.include_router(hikes_router)
app.include_router(preferences_router)


@app.get("/")
def root():
    return {"message": "Hiking companion backend is running"}
