"""
In-memory stand-in for the parts of the Supabase client the services use:
table queries, RPC, Storage buckets and Auth. Failures can be injected per
table/operation to exercise the error paths.
"""
import copy
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace


class FakeAPIError(Exception):
    pass


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db, table, op, payload=None, columns="*"):
        self.db = db
        self.table = table
        self.op = op
        self.payload = payload
        self.columns = columns
        self.filters = []
        self._order = None
        self._limit = None

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def contains(self, column, values):
        self.filters.append(lambda row: set(values).issubset(set(row.get(column) or [])))
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns == "*":
            return copy.deepcopy(row)
        names = [c.strip() for c in self.columns.split(",")]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    def execute(self):
        self.db.check_failure(self.table, self.op)
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            found = [row for row in rows if self._matches(row)]
            if self._order:
                column, desc = self._order
                found.sort(key=lambda row: row.get(column) or "", reverse=desc)
            if self._limit is not None:
                found = found[:self._limit]
            return FakeResponse([self._project(row) for row in found])
        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = copy.deepcopy(item)
                row.setdefault("id", str(uuid.uuid4()))
                if any(existing["id"] == row["id"] for existing in rows):
                    raise FakeAPIError("duplicate key value violates unique constraint")
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return FakeResponse(inserted)
        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self.payload))
                    updated.append(copy.deepcopy(row))
            return FakeResponse(updated)
        if self.op == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse(copy.deepcopy(removed))
        raise ValueError(self.op)


class FakeTable:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def select(self, columns="*"):
        return FakeQuery(self.db, self.name, "select", columns=columns)

    def insert(self, payload):
        return FakeQuery(self.db, self.name, "insert", payload=payload)

    def update(self, payload):
        return FakeQuery(self.db, self.name, "update", payload=payload)

    def delete(self):
        return FakeQuery(self.db, self.name, "delete")


class FakeRpc:
    def __init__(self, db, name, params):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.check_failure("rpc", self.name)
        groups = self.db.tables.setdefault("groups", [])
        group = next((g for g in groups if g["id"] == self.params["group_id"]), None)
        member_id = self.params["member_id"]
        if self.name == "add_group_member":
            if group is None or member_id in group["members"]:
                return FakeResponse([])
            group["members"] = group["members"] + [member_id]
            return FakeResponse([copy.deepcopy(group)])
        if self.name == "remove_group_member":
            if group is None:
                return FakeResponse([])
            group["members"] = [m for m in group["members"] if m != member_id]
            return FakeResponse([copy.deepcopy(group)])
        raise FakeAPIError(f"function {self.name} does not exist")


class FakeBucket:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def upload(self, path, file, file_options=None):
        self.db.check_failure("storage", "upload")
        key = (self.name, path)
        if key in self.db.objects:
            raise FakeAPIError("The resource already exists")
        self.db.objects[key] = {
            "content": file,
            "content_type": (file_options or {}).get("content-type"),
        }
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths):
        self.db.check_failure("storage", "remove")
        removed = []
        for path in paths:
            if self.db.objects.pop((self.name, path), None) is not None:
                removed.append({"name": path})
        return removed


class FakeStorage:
    def __init__(self, db):
        self.db = db

    def from_(self, bucket):
        return FakeBucket(self.db, bucket)


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        self.auth.db.check_failure("auth", "sign_out")
        email = self.auth.tokens.get(jwt)
        if email is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        if scope == "global":
            for token, owner in list(self.auth.tokens.items()):
                if owner == email:
                    del self.auth.tokens[token]
        else:
            del self.auth.tokens[jwt]

    def delete_user(self, user_id):
        self.auth.db.check_failure("auth", "delete_user")
        for email, account in list(self.auth.accounts.items()):
            if account["id"] == user_id:
                del self.auth.accounts[email]


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.accounts = {}
        self.tokens = {}
        self.admin = FakeAdmin(self)

    def _user(self, account):
        return SimpleNamespace(
            id=account["id"],
            email=account["email"],
            user_metadata=account["user_metadata"],
            created_at=account["created_at"],
        )

    def _session(self, account):
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = account["email"]
        return SimpleNamespace(access_token=token)

    def sign_up(self, credentials):
        self.db.check_failure("auth", "sign_up")
        email = credentials["email"]
        if email in self.accounts:
            raise FakeAPIError("User already registered")
        account = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password": credentials["password"],
            "user_metadata": credentials.get("options", {}).get("data", {}),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.accounts[email] = account
        return SimpleNamespace(user=self._user(account), session=self._session(account))

    def sign_in_with_password(self, credentials):
        self.db.check_failure("auth", "sign_in")
        account = self.accounts.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        return SimpleNamespace(user=self._user(account), session=self._session(account))

    def get_user(self, jwt=None):
        email = self.tokens.get(jwt)
        if email is None or email not in self.accounts:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self._user(self.accounts[email]))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.objects = {}
        self.failures = set()
        self.storage = FakeStorage(self)
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeTable(self, name)

    def rpc(self, name, params):
        return FakeRpc(self, name, params)

    def fail(self, target, op):
        self.failures.add((target, op))

    def recover(self):
        self.failures.clear()

    def check_failure(self, target, op):
        if (target, op) in self.failures:
            raise FakeAPIError(f"connection reset while running {op} on {target}")

    def rows(self, table):
        return self.tables.get(table, [])
