from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.database import init_db

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Daily Electricity API", lifespan=lifespan)

# Configure allowed origins via FRONTEND_ORIGINS env var (comma-separated).
# Example: FRONTEND_ORIGINS="http://localhost:3000,http://10.5.0.2:3000"
raw = os.environ.get("FRONTEND_ORIGINS", "http://localhost:3000,http://localhost:8000")
origins = [o.strip() for o in raw.split(",") if o.strip()]

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
