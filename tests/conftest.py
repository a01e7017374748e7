from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import asyncpg
import pytest
from fastapi.testclient import TestClient

from core import db
from countries import repository as countries_repository
from documents import repository as documents_repository
from health import repository as health_repository
from main import app
from submissions import repository as submissions_repository
from users import repository as users_repository


class FakeStore:
    """In-memory stand-in for the Postgres tables, wired in at repository level."""

    def __init__(self) -> None:
        self.countries: dict[int, dict] = {
            1: {"id": 1, "country": "Perú"},
            2: {"id": 2, "country": "Chile"},
        }
        self.users: dict[str, dict] = {}
        self.documents: list[dict] = []
        self.submissions: list[dict] = []
        self._ids = {"users": 0, "documents": 0, "submissions": 0}
        self._serial = 0
        self._tick = 0
        self.fail_document_writes = False

    def _next_id(self, table: str) -> int:
        self._ids[table] += 1
        return self._ids[table]

    def now(self) -> datetime:
        # Strictly increasing so ordering and "updated_at advanced" are observable.
        self._tick += 1
        return datetime(2025, 6, 1, tzinfo=timezone.utc) + timedelta(seconds=self._tick)

    # countries
    async def list_countries(self) -> list[dict]:
        return [dict(self.countries[k]) for k in sorted(self.countries)]

    async def get_country(self, country_id: int) -> dict | None:
        row = self.countries.get(country_id)
        return dict(row) if row else None

    # users
    async def upsert_user(self, *, email: str, country_id: int, **fields) -> tuple[dict, bool]:
        if country_id not in self.countries:
            # users.country_id REFERENCES country (id)
            raise asyncpg.ForeignKeyViolationError(
                'insert or update on table "users" violates foreign key constraint "users_country_id_fkey"'
            )
        existing = self.users.get(email)
        if existing is None:
            now = self.now()
            row = {
                "id": self._next_id("users"),
                "email": email,
                "country_id": country_id,
                "created_at": now,
                "updated_at": now,
                **fields,
            }
            if row["video_confirmado"] is None:
                row["video_confirmado"] = False
            self.users[email] = row
            return dict(row), True
        existing.update(fields, country_id=country_id, updated_at=self.now())
        return dict(existing), False

    async def get_user_with_country(self, email: str) -> dict | None:
        row = self.users.get(email)
        if row is None:
            return None
        country = self.countries.get(row["country_id"])
        return {**row, "country_name": country["country"] if country else None}

    async def get_user_id_by_email(self, email: str) -> int | None:
        row = self.users.get(email)
        return row["id"] if row else None

    def _email_for(self, user_id: int) -> str:
        return next(u["email"] for u in self.users.values() if u["id"] == user_id)

    # documents
    async def replace_document(self, *, user_id: int, document_type: str, **fields) -> tuple[dict, list[str]]:
        if self.fail_document_writes:
            raise RuntimeError("connection reset by peer")
        superseded = [
            d for d in self.documents
            if d["user_id"] == user_id and d["document_type"] == document_type
        ]
        self.documents = [d for d in self.documents if d not in superseded]
        row = {
            "id": self._next_id("documents"),
            "user_id": user_id,
            "document_type": document_type,
            "uploaded_at": self.now(),
            **fields,
        }
        self.documents.append(row)
        return dict(row), [d["file_path"] for d in superseded]

    async def list_documents_for_email(self, email: str) -> list[dict]:
        rows = [d for d in self.documents if self._email_for(d["user_id"]) == email]
        return sorted(rows, key=lambda d: (d["uploaded_at"], d["id"]), reverse=True)

    # submissions
    async def create_submission(
        self,
        *,
        user_id: int,
        terms_accepted: bool,
        make_reference: Callable[[int], str],
    ) -> dict:
        self._serial += 1
        row = {
            "id": self._next_id("submissions"),
            "user_id": user_id,
            "reference_number": make_reference(self._serial),
            "terms_accepted": terms_accepted,
            "status": "pending",
            "submission_date": self.now(),
        }
        self.submissions.append(row)
        return dict(row)

    async def list_submissions_for_email(self, email: str) -> list[dict]:
        user = self.users.get(email)
        if user is None:
            return []
        rows = [
            {**s, "nombre": user["nombre"], "email": email}
            for s in self.submissions
            if s["user_id"] == user["id"]
        ]
        return sorted(rows, key=lambda s: (s["submission_date"], s["id"]), reverse=True)

    # health
    async def server_info(self) -> dict:
        return {
            "current_time": datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
            "pg_version": "PostgreSQL 16.2 on x86_64-pc-linux-gnu, compiled by gcc",
        }

    async def table_counts(self) -> dict[str, int]:
        return {
            "users": len(self.users),
            "documents": len(self.documents),
            "submissions": len(self.submissions),
        }

    async def submissions_by_status(self) -> list[dict]:
        counts: dict[str, int] = {}
        for s in self.submissions:
            counts[s["status"]] = counts.get(s["status"], 0) + 1
        return [{"status": k, "count": v} for k, v in counts.items()]


async def _noop() -> None:
    return None


@pytest.fixture()
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(db, "init_pool", _noop)
    monkeypatch.setattr(db, "close_pool", _noop)

    for module, names in (
        (countries_repository, ["list_countries", "get_country"]),
        (users_repository, ["upsert_user", "get_user_with_country", "get_user_id_by_email"]),
        (documents_repository, ["replace_document", "list_documents_for_email"]),
        (submissions_repository, ["create_submission", "list_submissions_for_email"]),
        (health_repository, ["server_info", "table_counts", "submissions_by_status"]),
    ):
        for name in names:
            monkeypatch.setattr(module, name, getattr(fake, name))
    return fake


@pytest.fixture()
def upload_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_ROOT", str(root))
    return root


@pytest.fixture()
def client(store: FakeStore, upload_root: Path) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(client: TestClient) -> Callable[..., dict]:
    """Create a profile through the API and return its row."""

    def _make_user(email: str = "ana@example.com", **overrides) -> dict:
        payload = {
            "nombre": "Ana Torres",
            "email": email,
            "telefono": "+51 999 888 777",
            "direccion": "Av. Arequipa 123",
            "especialidades": ["enfermería", "geriatría"],
            "video_confirmado": True,
            "country_id": 1,
        }
        payload.update(overrides)
        resp = client.post("/api/users", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]

    return _make_user
