# equiptrack/main.py
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from equiptrack.data import seed_equipment
from equiptrack.equipments import router as equipment_router
from equiptrack.llm_engine import InFlightGuard
from equiptrack.maintenance import router as maintenance_router
from equiptrack.store import EquipmentStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def create_app(store: EquipmentStore = None) -> FastAPI:
    app = FastAPI(title="EquipTrack Equipment Asset API")

    # Enable CORS for the frontend
    origins = os.getenv("EQUIPTRACK_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One store per app: this is the session's whole equipment collection
    app.state.store = store if store is not None else EquipmentStore(seed_equipment())
    app.state.generation_guard = InFlightGuard()

    # Register routers
    app.include_router(equipment_router, prefix="/equipments", tags=["Equipments"])
    app.include_router(maintenance_router, prefix="/maintenance", tags=["Maintenance"])
    return app


app = create_app()
