from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.appointments import router as appointments_router
from app.api.routes.chatbot_routes import router as chatbot_router

from app.api.routes.patient.exercise import router as exercise_router
from app.api.routes.patient.medications import router as medications_router
from app.api.routes.patient.journal import router as journal_router
from app.api.routes.patient.progress import router as progress_router

from app.api.routes.provider.patients import router as provider_patients_router
from app.api.routes.provider.prescriptions import router as provider_prescriptions_router
from app.api.routes.provider.reports import router as provider_reports_router

from app.api.routes.admin.users import router as admin_users_router

api_router = APIRouter()

# Shared routes
api_router.include_router(auth_router)
api_router.include_router(appointments_router)
api_router.include_router(chatbot_router)

# Patient routes
api_router.include_router(exercise_router)
api_router.include_router(medications_router)
api_router.include_router(journal_router)
api_router.include_router(progress_router)

# Provider routes
api_router.include_router(provider_patients_router)
api_router.include_router(provider_prescriptions_router)
api_router.include_router(provider_reports_router)

# Admin routes
api_router.include_router(admin_users_router)
