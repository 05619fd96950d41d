"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
import os
from concurrent.futures import Future

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from PyQt6.QtCore import QSettings

import publisher_analytics
from publisher_analytics.backends.http import SendResult
from publisher_analytics.environment import AppIdentity, Environment
from fixtures.collect_server import CollectServer


class RecordingReporter:
    """Reporter stand-in that records payloads instead of sending them"""

    def __init__(self, sent, transport=None, timeout=None):
        self.sent = sent
        self.transport = transport
        self.timeout = timeout

    def send(self, payload, on_complete=None):
        self.sent.append(payload)
        future = Future()
        if on_complete is not None:
            future.add_done_callback(lambda f: on_complete(f.result()))
        future.set_result(SendResult(body="recorded"))
        return future

    def send_blocking(self, payload):
        self.sent.append(payload)
        return SendResult(body="recorded")


class Recorder:
    """Collects payloads from every RecordingReporter it creates"""

    def __init__(self):
        self.payloads = []
        self.reporters = []

    def factory(self, transport=None, timeout=None):
        reporter = RecordingReporter(self.payloads, transport=transport, timeout=timeout)
        self.reporters.append(reporter)
        return reporter


@pytest.fixture
def settings(tmp_path):
    """QSettings backed by a throwaway ini file"""
    return QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def environment():
    """Fixed host environment"""
    return Environment(
        device_id="device-123",
        operating_system="Linux 6.1",
        runtime_mode="editor",
        app_identity=AppIdentity("My Tool", "com.example.mytool", "Example Co"),
    )


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def client(settings, environment, recorder):
    """TelemetryClient that records payloads instead of sending them"""
    return publisher_analytics.TelemetryClient(
        settings, environment=environment, reporter_factory=recorder.factory
    )


@pytest.fixture(scope="session")
def collect_server_session():
    server = CollectServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def collect_server(collect_server_session):
    """Local collection endpoint, reset for every test"""
    collect_server_session.reset()
    yield collect_server_session
    collect_server_session.reset()


@pytest.fixture(autouse=True)
def reset_shared_client():
    """Make sure the process-wide client never leaks between tests"""
    publisher_analytics._reset()
    yield
    publisher_analytics._reset()
