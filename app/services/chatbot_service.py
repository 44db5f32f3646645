# app/services/chatbot_service.py
from __future__ import annotations

import google.generativeai as genai

from app.core.config import settings
from app.models.records import ChatRecord, ChatRole
from app.services import record_store
from app.services.logger import get_logger, log_debug

logger = get_logger(__name__)

OUT_OF_SCOPE_RESPONSE = "That is out of my scope. Please consult a healthcare professional."
SERVICE_ERROR_RESPONSE = "Service error: Could not connect to AI. Check your API key and network."
EMPTY_RESPONSE = "I'm sorry, I couldn't generate a coherent response."

SYSTEM_PROMPT = f"""
Act as a helpful, non-diagnostic AI assistant for a cardiac rehabilitation patient.
Your responses must be supportive, educational, and strictly limited to exercise routines,
medication schedules, general heart health guidance, and stress management tips.
NEVER provide clinical diagnoses, recommend specific dosages, or offer emergency medical advice.
If the user asks for out-of-scope advice, or mentions symptoms requiring immediate attention
(like severe chest pain), you MUST reply ONLY with: '{OUT_OF_SCOPE_RESPONSE}'.
Keep your answers brief, informative, and encouraging.
""".strip()


def is_in_scope(reply: str) -> bool:
    return OUT_OF_SCOPE_RESPONSE.lower() not in reply.lower()


def to_gemini_history(messages: list[ChatRecord]) -> list[dict]:
    # Gemini calls the assistant side "model"
    return [
        {"role": "user" if m.role is ChatRole.USER else "model", "parts": [m.text]}
        for m in messages
    ]


class ChatbotService:
    def __init__(self, model=None):
        self.model = model if model is not None else self._load_model()

    # ---------------- Gemini Loader ----------------
    def _load_model(self):
        """
        Builds the Gemini client. Without an API key the app still starts and
        every reply becomes the service-error message.
        """
        if not settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY not set; chatbot replies are disabled.")
            return None

        genai.configure(api_key=settings.GEMINI_API_KEY)
        return genai.GenerativeModel(settings.GEMINI_MODEL, system_instruction=SYSTEM_PROMPT)

    # ---------------- Completion ----------------
    def generate_reply(self, history: list[ChatRecord], text: str) -> tuple[str, bool]:
        """Returns (reply, in_scope)."""
        if self.model is None:
            return SERVICE_ERROR_RESPONSE, False

        try:
            chat = self.model.start_chat(history=to_gemini_history(history))
            response = chat.send_message(text)
            reply = (response.text or "").strip() or EMPTY_RESPONSE
        except Exception as e:
            logger.error("Gemini request failed: %r", e)
            return SERVICE_ERROR_RESPONSE, False

        return reply, is_in_scope(reply)

    # ---------------- Main Chat ----------------
    def chat(self, patient_id: str, text: str, db=None) -> tuple[str, bool]:
        history = record_store.fetch_chat_messages(patient_id, db=db)

        record_store.save_chat_message(patient_id, ChatRole.USER, text, db=db)

        reply, in_scope = self.generate_reply(history, text)
        log_debug("chat_reply", {"patient_id": patient_id, "in_scope": in_scope, "chars": len(reply)})

        record_store.save_chat_message(patient_id, ChatRole.ASSISTANT, reply, in_scope=in_scope, db=db)
        return reply, in_scope
