import os

BASE_PATH = os.path.join(os.path.dirname(__file__), "..", "static", "messages")

def load_message(filename: str, **kwargs) -> str:
    """Carga un mensaje fijo de static/messages y sustituye sus campos."""
    path = os.path.join(BASE_PATH, filename)
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return text.format(**kwargs).strip()
