from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from datetime import datetime
import logging
import os

import config
from database import Base, engine
import models  # noqa: F401  registers all tables on Base.metadata
import auth
import routers.properties as properties
import routers.tenants as tenants
import routers.transactions as transactions
import routers.dashboard as dashboard
import routers.rent_generation as rent_generation
from errors import register_error_handlers
from scheduler import start_scheduler, shutdown_scheduler


os.makedirs(config.LOG_DIR, exist_ok=True) # Create the log directory if it doesn't exist

# Create a unique log file name based on current date/time
current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
LOG_FILE = os.path.join(config.LOG_DIR, f"app_{current_time_str}.log")

# Configure the root logger
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE, # Log to a file
    filemode='a' # Append to the file if it exists
)

# Also add a StreamHandler to output logs to the console
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logging.getLogger().addHandler(console_handler) # Add to the root logger

logger = logging.getLogger(__name__)
logger.info("Application starting up...")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    Base.metadata.create_all(bind=engine)
    if config.ENABLE_SCHEDULER:
        start_scheduler()
    yield
    shutdown_scheduler()


app = FastAPI(lifespan=lifespan)

# Split the string into a list, stripping any whitespace
allowed_origins = [origin.strip() for origin in config.CORS_ALLOWED_ORIGINS.split(',')]

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Rent Manager API",
        version="1.0.0",
        description="API for tracking properties, tenants and rent transactions",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    # Apply security globally to all endpoints
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(tenants.router)
app.include_router(transactions.router)
app.include_router(dashboard.router)
app.include_router(rent_generation.router)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
