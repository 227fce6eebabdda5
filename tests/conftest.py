"""Pytest configuration and shared fixtures"""

import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx
import pytest

from kube_bootstrap.auth import TokenFileAuth
from kube_bootstrap.client import ApiClient
from kube_bootstrap.models import ClientConfiguration
from kube_bootstrap.tls import create_ssl_context

DATA_DIR = Path(__file__).parent / "data"
CA_PEM_PATH = DATA_DIR / "ca.crt"
CA_DER_PATH = DATA_DIR / "ca.der"
BASE_URL = "https://10.96.0.1:443"

ENV_PREFIXES = ("KUBERNETES_SERVICE_", "KUBE_BOOTSTRAP_")


@pytest.fixture
def clean_env(monkeypatch):
    """Fixture that temporarily clears KUBERNETES_SERVICE_* and KUBE_BOOTSTRAP_*.

    Tests may run inside a pod, where the kubelet sets the service variables.
    """
    for key in [k for k in os.environ if k.startswith(ENV_PREFIXES)]:
        monkeypatch.delenv(key)


@pytest.fixture
def ca_cert_path():
    """Path to a self-signed PEM CA certificate"""
    return str(CA_PEM_PATH)


@pytest.fixture
def ca_der_path():
    """Path to the same CA certificate, DER encoded"""
    return str(CA_DER_PATH)


@pytest.fixture
def token_file(tmp_path):
    """Token file containing 'abc123' plus a trailing newline"""
    path = tmp_path / "token"
    path.write_text("abc123\n")
    return path


class FakeClock:
    """Controllable replacement for kube_bootstrap.auth._utcnow"""

    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock(monkeypatch):
    """Frozen clock for token expiry tests"""
    fake = FakeClock()
    monkeypatch.setattr("kube_bootstrap.auth._utcnow", fake)
    return fake


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled"""

    def __init__(self, handler=None):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if handler is None:
                return httpx.Response(200, json={"kind": "Status", "status": "Success"})
            return handler(request)

        super().__init__(record)


@pytest.fixture
def configuration(ca_cert_path, token_file):
    """ClientConfiguration bound to the test CA and token file"""
    return ClientConfiguration(
        base_url=BASE_URL,
        ssl_context=create_ssl_context(ca_cert_path),
        auth=TokenFileAuth(token_file),
        timeout=httpx.Timeout(30, read=None),
    )


@pytest.fixture
def make_client(configuration):
    """Factory for an ApiClient talking to a RecordingTransport"""

    def _make(handler=None) -> tuple[ApiClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return ApiClient(configuration, transport=transport), transport

    return _make
