"""
Shared fixtures: an in-memory stand-in for the Supabase client.

FakeDatabase keeps rows per table and applies the row-level security rules
from app.config.policies_config to every query, so tests exercise the same
ownership behaviour the Postgres policies give the real backend.
"""

import re
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.config.policies_config import AUTHENTICATED, TABLES, get_policy
from app.core.dependencies import get_access_token, get_user_supabase
from app.database.supabase_client import get_supabase
from app.main import app
from app.modules.auth import service as auth_service_module
from fastapi import Depends

SUPPLIER_ID = "11111111-1111-1111-1111-111111111111"
SUPPLIER_EMAIL = "quality@acme.example"
OTHER_SUPPLIER_ID = "22222222-2222-2222-2222-222222222222"
OTHER_SUPPLIER_EMAIL = "qa@globex.example"

THICKNESS_ID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"   # 10..20 mm
WEIGHT_ID = "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"      # ..20 kg, no minimum

EMBED_PATTERN = re.compile(r"(\w+)\s*\(([^)]*)\)")

# (table, embedded relation) -> foreign key column on table
RELATIONS = {
    ("measurements", "quality_parameters"): "parameter_id",
    ("measurements", "suppliers"): "supplier_id",
}

FOREIGN_KEYS = {
    "measurements": {"supplier_id": "suppliers", "parameter_id": "quality_parameters"},
}

COLUMNS = {
    "suppliers": ["id", "name", "email", "created_at"],
    "quality_parameters": ["id", "name", "description", "unit", "min_value", "max_value", "created_at"],
    "measurements": ["id", "supplier_id", "parameter_id", "value", "measured_at", "created_at"],
}


def api_error(code, message):
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db, table, identity):
        self.db = db
        self.table_name = table
        self.identity = identity
        self.operation = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_count = None
        self.offset_count = 0
        self.count_mode = None
        self.ignore_duplicates = False

    # builders
    def select(self, columns="*", count=None, **kwargs):
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, payload, **kwargs):
        self.operation = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict="", ignore_duplicates=False, **kwargs):
        self.operation = "upsert"
        self.payload = payload
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, payload, **kwargs):
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self, **kwargs):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        wanted = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in wanted)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row[column]) >= str(value))
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row[column]) <= str(value))
        return self

    def order(self, column, desc=False, **kwargs):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    def offset(self, count):
        self.offset_count = count
        return self

    def range(self, start, end):
        self.offset_count = start
        self.limit_count = end - start + 1
        return self

    # row-level security
    def _allowed(self, row, operation, table=None):
        table = table or self.table_name
        if self.identity is None:
            return True
        scope = get_policy(table, operation)
        if scope is None:
            return False
        if scope == AUTHENTICATED:
            return True
        return str(row.get(TABLES[table]["owner_column"])) == str(self.identity)

    def _matching(self, operation):
        rows = self.db.tables[self.table_name]
        return [r for r in rows if self._allowed(r, operation) and all(f(r) for f in self.filters)]

    def _project(self, row):
        embeds = EMBED_PATTERN.findall(self.columns)
        plain = [c.strip() for c in EMBED_PATTERN.sub("", self.columns).split(",") if c.strip()]
        if not plain or "*" in plain:
            projected = dict(row)
        else:
            projected = {c: row.get(c) for c in plain}
        for relation, fields in embeds:
            fk_column = RELATIONS[(self.table_name, relation)]
            target = self.db.find(relation, row.get(fk_column))
            if target is None or not self._allowed(target, "select", relation):
                projected[relation] = None
                continue
            names = [f.strip() for f in fields.split(",") if f.strip()]
            projected[relation] = {n: target.get(n) for n in names}
        return projected

    def _new_row(self, values):
        row = {column: None for column in COLUMNS[self.table_name]}
        row["id"] = str(uuid.uuid4())
        row["created_at"] = datetime.now(timezone.utc).isoformat()
        row.update(values)
        return row

    def _check_insert(self, row):
        if not self._allowed(row, "insert"):
            raise api_error(
                "42501",
                f'new row violates row-level security policy for table "{self.table_name}"'
            )
        for column, target in FOREIGN_KEYS.get(self.table_name, {}).items():
            if self.db.find(target, row.get(column)) is None:
                raise api_error(
                    "23503",
                    f'insert or update on table "{self.table_name}" violates foreign key constraint '
                    f'"{self.table_name}_{column}_fkey"'
                )

    def execute(self):
        self.db.calls.append((self.table_name, self.operation))
        rows = self.db.tables[self.table_name]

        if self.operation in ("insert", "upsert"):
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for values in payload:
                row = self._new_row(values)
                if self.operation == "upsert" and self.db.find(self.table_name, row["id"]) is not None:
                    if self.ignore_duplicates:
                        continue
                self._check_insert(row)
                rows.append(row)
                created.append(dict(row))
            return FakeResponse(created)

        if self.operation == "update":
            updated = []
            for row in self._matching("update"):
                row.update(self.payload)
                updated.append(dict(row))
            return FakeResponse(updated)

        if self.operation == "delete":
            doomed = self._matching("delete")
            self.db.tables[self.table_name] = [r for r in rows if r not in doomed]
            return FakeResponse([dict(r) for r in doomed])

        selected = self._matching("select")
        total = len(selected) if self.count_mode == "exact" else None
        if self.order_by:
            column, desc = self.order_by
            selected = sorted(selected, key=lambda r: str(r.get(column)), reverse=desc)
        selected = selected[self.offset_count:]
        if self.limit_count is not None:
            selected = selected[:self.limit_count]
        if self.db.max_rows is not None:
            selected = selected[:self.db.max_rows]
        return FakeResponse([self._project(r) for r in selected], count=total)


class FakeAuthAdmin:
    def __init__(self, db):
        self.db = db

    def sign_out(self, jwt, scope="global"):
        self.db.tokens.pop(jwt, None)

    def list_users(self, page=None, per_page=50):
        users = list(self.db.users.values())
        start = ((page or 1) - 1) * per_page
        return users[start:start + per_page]


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.admin = FakeAuthAdmin(db)

    def sign_up(self, credentials):
        email = credentials["email"]
        if any(u.email == email for u in self.db.users.values()):
            raise Exception("User already registered")
        metadata = credentials.get("options", {}).get("data") or {}
        user = self.db.add_user(str(uuid.uuid4()), email, metadata)
        self.db.passwords[email] = credentials["password"]
        # on_auth_user_created
        self.db.tables["suppliers"].append({
            "id": user.id,
            "email": email,
            "name": metadata.get("full_name") or email,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.db.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = next(u for u in self.db.users.values() if u.email == email)
        token = self.db.issue_token(user.id)
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def get_user(self, jwt=None):
        user_id = self.db.tokens.get(jwt)
        if user_id is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.db.users[user_id])


class FakeSupabase:
    def __init__(self, db, identity=None):
        self.db = db
        self.identity = identity
        self.auth = FakeAuth(db)

    def table(self, name):
        return FakeQuery(self.db, name, self.identity)


class FakeDatabase:
    def __init__(self):
        self.tables = {"suppliers": [], "quality_parameters": [], "measurements": []}
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.calls = []
        self.max_rows = None  # PostgREST db-max-rows cap; None means unlimited

    def client_for(self, identity=None):
        """identity=None acts as the service role and bypasses RLS"""
        return FakeSupabase(self, identity)

    def find(self, table, row_id):
        return next((r for r in self.tables[table] if str(r["id"]) == str(row_id)), None)

    def add_user(self, user_id, email, metadata=None):
        user = SimpleNamespace(
            id=user_id, email=email, user_metadata=metadata or {}, app_metadata={}
        )
        self.users[user_id] = user
        return user

    def issue_token(self, user_id):
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = user_id
        return token

    def add_measurement(self, supplier_id, parameter_id, value, measured_at):
        row = {
            "id": str(uuid.uuid4()),
            "supplier_id": supplier_id,
            "parameter_id": parameter_id,
            "value": value,
            "measured_at": measured_at,
            "created_at": measured_at,
        }
        self.tables["measurements"].append(row)
        return row


@pytest.fixture(autouse=True)
def clear_auth_cache():
    auth_service_module._AUTH_USER_CACHE.clear()
    yield
    auth_service_module._AUTH_USER_CACHE.clear()


@pytest.fixture
def db():
    database = FakeDatabase()
    for supplier_id, email, name in (
        (SUPPLIER_ID, SUPPLIER_EMAIL, "Acme Castings"),
        (OTHER_SUPPLIER_ID, OTHER_SUPPLIER_EMAIL, "Globex Forging"),
    ):
        database.add_user(supplier_id, email, {"full_name": name})
        database.tables["suppliers"].append({
            "id": supplier_id, "email": email, "name": name, "created_at": "2025-02-01T08:00:00+00:00"
        })
    database.tables["quality_parameters"].extend([
        {
            "id": THICKNESS_ID, "name": "Wall thickness", "description": "Measured at flange",
            "unit": "mm", "min_value": 10, "max_value": 20, "created_at": "2025-02-01T08:00:00+00:00",
        },
        {
            "id": WEIGHT_ID, "name": "Casting weight", "description": None,
            "unit": "kg", "min_value": None, "max_value": 20, "created_at": "2025-02-01T08:00:00+00:00",
        },
    ])
    return database


@pytest.fixture
def client(db):
    def fake_user_supabase(token: str = Depends(get_access_token)):
        return db.client_for(db.tokens.get(token))

    app.dependency_overrides[get_supabase] = lambda: db.client_for(None)
    app.dependency_overrides[get_user_supabase] = fake_user_supabase
    app.state.limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(db):
    return {"Authorization": f"Bearer {db.issue_token(SUPPLIER_ID)}"}


@pytest.fixture
def other_headers(db):
    return {"Authorization": f"Bearer {db.issue_token(OTHER_SUPPLIER_ID)}"}
