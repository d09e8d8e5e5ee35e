# tests/helpers.py
from marketplace.repos.database_storage import DatabaseStorage


class SessionPerCallStorage:
    """DatabaseStorage z nowa sesja na kazde wywolanie, bez nieaktualnej identity map."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def __getattr__(self, name):
        def call(*args, **kwargs):
            db = self.session_factory()
            try:
                return getattr(DatabaseStorage(db), name)(*args, **kwargs)
            finally:
                db.close()

        return call


class FailingAIClient:
    """AI niedostepne - kazde wywolanie rzuca."""

    def __init__(self):
        self.calls = 0

    def generate(self, prompt, **kwargs):
        self.calls += 1
        raise ConnectionError("AI service unavailable")


class ScriptedAIClient:
    """Zwraca przygotowane odpowiedzi po kolei i zapamietuje prompty."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt, **kwargs):
        self.prompts.append(prompt)
        return self.responses.pop(0)


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email: str, role: str = "buyer", name: str = "Test User") -> tuple:
    resp = client.post(
        "/api/auth/register",
        json={"email": email, "password": "secret123", "name": name, "role": role},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return body["token"], body["user"]


def create_product(client, token: str, **overrides) -> dict:
    payload = {
        "name": "Test Product",
        "shortDescription": "A product for tests",
        "price": "10.00",
        "stock": 5,
        "images": ["https://img.example/test.jpg"],
    }
    payload.update(overrides)
    resp = client.post("/api/products", json=payload, headers=auth(token))
    assert resp.status_code == 200, resp.text
    return resp.json()
