import sys
import os
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine, select
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models.user import User
from app.models.company import Company
from app.models.project import Project, ProjectStatus
from app.models.chat_message import ChatMessage
from app.api.endpoints.auth import get_current_user
from app.database import get_session
from app.services.reply_generator import get_reply_generator, TemplateReplyGenerator
from app.core.security import create_access_token

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SQLModel.metadata.create_all(engine)


def override_get_session():
    with Session(engine) as session:
        yield session


def make_user():
    return User(id="u1", name="Ayşe", email="ayse@example.com", password_hash="hashed")


@pytest.fixture(autouse=True)
def setup_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        session.add(make_user())
        session.commit()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_reply_generator] = lambda: TemplateReplyGenerator()
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    user = make_user()
    app.dependency_overrides[get_current_user] = lambda: user
    return client


def stored_messages():
    with Session(engine) as session:
        return session.exec(select(ChatMessage).order_by(ChatMessage.created_at)).all()


def bearer(user_id="u1"):
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


def add_project(**kwargs):
    with Session(engine) as session:
        company = Company(id="c1", name="Acme", owner_id="u1")
        session.add(company)
        project = Project(
            id="p1",
            name="Pazaryeri",
            description="El yapımı ürünler için pazaryeri",
            entrepreneur_id="u1",
            company_id="c1",
            **kwargs,
        )
        session.add(project)
        session.commit()
        return project.id


def test_chat_without_token_is_unauthorized(client):
    resp = client.post("/ai/chat", json={"message": "Merhaba", "userId": "u1"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
    assert stored_messages() == []


def test_chat_with_invalid_token_is_unauthorized(client):
    resp = client.post(
        "/ai/chat",
        json={"message": "Merhaba", "userId": "u1"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
    assert stored_messages() == []


@pytest.mark.parametrize("payload", [
    {"userId": "u1"},
    {"message": "Merhaba"},
    {"message": "", "userId": "u1"},
    {},
])
def test_chat_requires_message_and_user_id(auth_client, payload):
    resp = auth_client.post("/ai/chat", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Message and userId are required"}
    assert stored_messages() == []


def test_chat_malformed_body_is_bad_request(client):
    resp = client.post(
        "/ai/chat",
        json={"message": "Merhaba", "userId": "u1", "conversationHistory": "not a list"},
        headers=bearer(),
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Message and userId are required"}
    assert stored_messages() == []


def test_chat_unparseable_body_without_token_is_unauthorized(client):
    resp = client.post("/ai/chat", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
    assert stored_messages() == []


def test_chat_invalid_body_with_bad_token_is_unauthorized(client):
    resp = client.post(
        "/ai/chat",
        json={"message": "Merhaba", "userId": "u1", "conversationHistory": "not a list"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert resp.status_code == 401
    assert stored_messages() == []


def test_chat_budget_question_without_project(auth_client):
    resp = auth_client.post("/ai/chat", json={"message": "Bütçe ne kadar olmalı?", "userId": "u1"})
    assert resp.status_code == 200
    data = resp.json()
    assert "Bütçe planlaması için" in data["response"]
    assert "Projenizin mevcut bütçesi: Belirtilmemiş" in data["response"]
    assert "₺" not in data["response"]

    msgs = stored_messages()
    assert len(msgs) == 2
    assert [m.message_type for m in msgs] == ["user", "assistant"]
    user_msg, ai_msg = msgs
    assert data["chatId"] == ai_msg.id
    assert user_msg.response is None
    assert ai_msg.response == data["response"]
    assert ai_msg.message == user_msg.message == "Bütçe ne kadar olmalı?"


def test_chat_records_share_user_project_and_context(auth_client):
    add_project(budget=150000, status=ProjectStatus.ACTIVE)
    payload = {
        "message": "Ekip nasıl kurulmalı?",
        "userId": "u1",
        "projectId": "p1",
        "context": {"page": "dashboard"},
    }
    resp = auth_client.post("/ai/chat", json=payload)
    assert resp.status_code == 200

    msgs = stored_messages()
    assert [m.message_type for m in msgs] == ["user", "assistant"]
    for m in msgs:
        assert m.user_id == "u1"
        assert m.project_id == "p1"
        assert m.context == {"page": "dashboard"}


def test_chat_budget_and_team_replies_include_project_budget(auth_client):
    add_project(budget=150000, status=ProjectStatus.ACTIVE)

    budget = auth_client.post("/ai/chat", json={"message": "Maliyet hesabı", "userId": "u1", "projectId": "p1"})
    assert "Projenizin mevcut bütçesi: ₺150,000" in budget.json()["response"]

    team = auth_client.post("/ai/chat", json={"message": "Hangi freelancer ile çalışmalıyım?", "userId": "u1", "projectId": "p1"})
    assert "Projenizin bütçesi: ₺150,000" in team.json()["response"]
    assert "Temel Ekip Yapısı" in team.json()["response"]


def test_chat_team_reply_without_budget_uses_placeholder(auth_client):
    add_project(status=ProjectStatus.ACTIVE)
    resp = auth_client.post("/ai/chat", json={"message": "EKİP önerisi", "userId": "u1", "projectId": "p1"})
    assert "Projenizin bütçesi: Belirtilmemiş" in resp.json()["response"]


def test_chat_steps_reply_mentions_project_status(auth_client):
    add_project(status=ProjectStatus.IN_PROGRESS)
    resp = auth_client.post("/ai/chat", json={"message": "Sırada ne yapmalıyım, adım adım?", "userId": "u1", "projectId": "p1"})
    assert resp.status_code == 200
    assert "Projenizin mevcut durumu: IN_PROGRESS" in resp.json()["response"]


def test_chat_unknown_project_is_answered_without_context(auth_client):
    resp = auth_client.post("/ai/chat", json={"message": "Fiyat nedir?", "userId": "u1", "projectId": "missing"})
    assert resp.status_code == 200
    assert "Belirtilmemiş" in resp.json()["response"]


def test_chat_default_reply(auth_client):
    resp = auth_client.post("/ai/chat", json={"message": "Merhaba", "userId": "u1"})
    assert resp.status_code == 200
    assert resp.json()["response"].startswith("Merhaba! Projeniz hakkında")


def test_chat_passes_composed_prompts_to_generator(auth_client):
    add_project(budget=2500.5, industry="E-ticaret", status=ProjectStatus.ACTIVE)
    calls = []

    def fake_generator(system_prompt, user_prompt, project):
        calls.append((system_prompt, user_prompt, project))
        return "stub reply"

    app.dependency_overrides[get_reply_generator] = lambda: fake_generator
    resp = auth_client.post("/ai/chat", json={
        "message": "Ne önerirsin?",
        "userId": "u1",
        "projectId": "p1",
        "conversationHistory": [{"role": "user", "content": "Merhaba"}, {"role": "assistant", "content": "Selam"}],
    })
    assert resp.status_code == 200
    assert resp.json()["response"] == "stub reply"

    system_prompt, user_prompt, project = calls[0]
    assert "Hirenup" in system_prompt
    assert "- Proje Adı: Pazaryeri" in user_prompt
    assert "- Bütçe: ₺2,500.5" in user_prompt
    assert "- Endüstri: E-ticaret" in user_prompt
    assert "Kullanıcı Sorusu: Ne önerirsin?" in user_prompt
    assert "user: Merhaba\nassistant: Selam" in user_prompt
    assert project.entrepreneur.email == "ayse@example.com"
    assert project.company.name == "Acme"


def test_chat_without_history_has_no_history_block(auth_client):
    calls = []

    def fake_generator(system_prompt, user_prompt, project):
        calls.append(user_prompt)
        return "ok"

    app.dependency_overrides[get_reply_generator] = lambda: fake_generator
    auth_client.post("/ai/chat", json={"message": "Merhaba", "userId": "u1"})
    assert "Yeni proje oluşturuluyor" in calls[0]
    assert "Önceki Konuşma" not in calls[0]


def test_chat_generation_failure_keeps_user_message(auth_client):
    def broken_generator(system_prompt, user_prompt, project):
        raise RuntimeError("backend down")

    app.dependency_overrides[get_reply_generator] = lambda: broken_generator
    resp = auth_client.post("/ai/chat", json={"message": "Merhaba", "userId": "u1"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}

    msgs = stored_messages()
    assert [m.message_type for m in msgs] == ["user"]


def test_history_lists_only_callers_messages(auth_client):
    add_project()
    with Session(engine) as session:
        session.add(ChatMessage(message="a", message_type="user", user_id="u1", project_id="p1"))
        session.add(ChatMessage(message="b", message_type="user", user_id="u1"))
        session.add(ChatMessage(message="c", message_type="user", user_id="someone-else"))
        session.commit()

    resp = auth_client.get("/ai/chat/history")
    assert resp.status_code == 200
    assert sorted(m["message"] for m in resp.json()) == ["a", "b"]

    by_project = auth_client.get("/ai/chat/history", params={"projectId": "p1"})
    data = by_project.json()
    assert [m["message"] for m in data] == ["a"]
    assert data[0]["messageType"] == "user"
    assert data[0]["projectId"] == "p1"


def test_history_requires_auth(client):
    resp = client.get("/ai/chat/history")
    assert resp.status_code == 401


def test_chat_accepts_plain_three_argument_backend(auth_client):
    def external_backend(system_prompt, user_prompt, project_context):
        return "from backend"

    app.dependency_overrides[get_reply_generator] = lambda: external_backend
    resp = auth_client.post("/ai/chat", json={"message": "Merhaba", "userId": "u1"})
    assert resp.status_code == 200
    assert resp.json()["response"] == "from backend"

    msgs = stored_messages()
    assert [m.message_type for m in msgs] == ["user", "assistant"]
    assert msgs[1].response == "from backend"
