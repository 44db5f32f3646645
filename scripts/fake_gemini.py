"""Stand-in for google.generativeai.GenerativeModel in chatbot tests."""


class _Response:
    def __init__(self, text):
        self.text = text


class _Chat:
    def __init__(self, model, history):
        self.model = model
        self.history = history

    def send_message(self, text):
        if self.model.error:
            raise self.model.error
        return _Response(self.model.reply)


class StubModel:
    def __init__(self, reply="Gentle walking is a good start.", error=None):
        self.reply = reply
        self.error = error
        self.histories = []

    def start_chat(self, history=None):
        self.histories.append(history)
        return _Chat(self, history)
