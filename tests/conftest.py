import json
import os
from datetime import date

import bcrypt
import httpx
import pytest

from service.leave_service import LeaveService
from service.user_service import UserService
from utils.app_config import MailSettings, load_config
from utils.prompt_utils import Console

BASE_URL = "http://lms.test/api"
TODAY = date(2024, 6, 10)


class FakeApi:
    """Routes (method, path) to canned responses and records every request"""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json_body=None, status=200, error=None):
        self.routes[(method, f"/api{path}")] = (status, json_body, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not found"})
        status, body, error = self.routes[key]
        if error is not None:
            raise error
        return httpx.Response(status, json=body)

    def requests_to(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == f"/api{path}"]

    @staticmethod
    def body(request):
        return json.loads(request.content)


class ScriptedConsole(Console):
    """Console fed from a list of answers; raises EOFError once they run out"""

    def __init__(self, answers=(), passwords=()):
        self.answers = list(answers)
        self.passwords = list(passwords)
        self.prompts = []
        self.lines = []
        super().__init__(input_func=self._input, output_func=self.lines.append, password_func=self._password)

    def _input(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("no more scripted input")
        return self.answers.pop(0)

    def _password(self, prompt):
        self.prompts.append(prompt)
        return self.passwords.pop(0) if self.passwords else ""

    @property
    def text(self):
        return "\n".join(self.lines)


@pytest.fixture
def config(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("API_URL_") or key.startswith("MAIL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("API_URL_MAIN", BASE_URL)
    return load_config(str(tmp_path / ".env"))


@pytest.fixture
def mail_settings():
    return MailSettings(
        username="notifier@company.com",
        password="app-password",
        mail_from="notifier@company.com",
        mail_to="hr@company.com",
        server="smtp.company.com",
        port=587,
    )


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def http_client(api):
    client = httpx.Client(transport=httpx.MockTransport(api.handler))
    yield client
    client.close()


@pytest.fixture
def leave_service(config, http_client):
    return LeaveService(config, client=http_client)


@pytest.fixture
def user_service(config, http_client):
    return UserService(config, client=http_client)


@pytest.fixture
def make_console():
    return ScriptedConsole


@pytest.fixture
def hash_password():
    def _hash(password):
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")
    return _hash


@pytest.fixture
def sent_mail(monkeypatch):
    """Replace smtplib.SMTP with a recorder; the list collects every sent EmailMessage"""
    sent = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            pass

        def login(self, username, password):
            self.credentials = (username, password)

        def send_message(self, msg):
            sent.append(msg)

    monkeypatch.setattr("utils.mail_config_utils.smtplib.SMTP", FakeSMTP)
    return sent
