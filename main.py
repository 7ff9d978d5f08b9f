import logging

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.config import settings
from app.database import engine
from app.exceptions import register_exception_handlers
from app.models.all_models import Base
from app.routes.appointments.router import router as appointments_router
from app.routes.billing.router import router as billing_router
from app.routes.branches.router import router as branches_router
from app.routes.dashboard.router import router as dashboard_router
from app.routes.doctors.router import router as doctors_router
from app.routes.patients.router import router as patients_router
from app.routes.users.router import router as users_router
from app.routes.wellness.router import router as wellness_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Clinic Records API", version="1.0.0")
register_exception_handlers(app)


@app.get("/", include_in_schema=False)
def read_root():
    return RedirectResponse(url="/docs")



api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(patients_router)
api_v1_router.include_router(appointments_router)
api_v1_router.include_router(doctors_router)
api_v1_router.include_router(wellness_router)
api_v1_router.include_router(billing_router)
api_v1_router.include_router(branches_router)
api_v1_router.include_router(users_router)
api_v1_router.include_router(dashboard_router)

app.include_router(api_v1_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
