"""Service layer: Firestore access, progress/report computation and the chatbot."""
