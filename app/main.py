from fastapi import FastAPI

from app.api.routes.router import api_router
from app.core.config import settings
from app.core.firebase import init_firebase
from app.services.chatbot_service import ChatbotService
from app.services.logger import get_logger
from app.workers.summary_worker import start_summary_worker

logger = get_logger(__name__)

app = FastAPI(title="MyCardiacRehab Backend")


@app.on_event("startup")
def startup():
    """Initialize Firebase, the chatbot client and the background worker."""
    # Initialize Firebase Admin (reads credentials path from settings)
    init_firebase()

    app.state.chatbot_service = ChatbotService()

    if settings.SUMMARY_WORKER_ENABLED:
        start_summary_worker()
    else:
        logger.info("Weekly summary worker disabled.")


@app.get("/")
async def root():
    return {"message": "MyCardiacRehab Backend is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# Include API routers
app.include_router(api_router)
