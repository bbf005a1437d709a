"""Shared test fixtures."""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alerts.service import AlertsService
from definitions import InMemoryDefinitions, SQLiteDefinitions
from models.conditions import StringCondition, ThresholdCondition
from models.enums import Mode, StringOperator, ThresholdOperator


class RecordingChannel:
    """Channel that keeps every message it receives."""

    def __init__(self):
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        return True


@pytest.fixture
def memory_definitions():
    return InMemoryDefinitions()


@pytest.fixture
def sqlite_definitions(tmp_path):
    store = SQLiteDefinitions(str(tmp_path / "definitions.db")).connect()
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def definitions(request, tmp_path):
    """Each definitions backend in turn."""
    if request.param == "memory":
        yield InMemoryDefinitions()
    else:
        store = SQLiteDefinitions(str(tmp_path / "definitions.db")).connect()
        yield store
        store.close()


@pytest.fixture
def string_condition():
    return StringCondition(
        tenant_id="test-tenant",
        trigger_id="log-trigger",
        trigger_mode=Mode.FIRING,
        data_id="app-log",
        operator=StringOperator.CONTAINS,
        pattern="ERROR",
    )


@pytest.fixture
def threshold_condition():
    return ThresholdCondition(
        tenant_id="test-tenant",
        trigger_id="rt-trigger-jboss",
        trigger_mode=Mode.FIRING,
        data_id="rt-jboss-data",
        operator=ThresholdOperator.GT,
        threshold=1000.0,
    )


@pytest.fixture
def recorder():
    return RecordingChannel()


@pytest.fixture
def alerts_service(recorder):
    actions = [{"plugin": "email", "id": "email-to-test",
                "properties": {"to": "admin@hawkular.org"}}]
    return AlertsService([recorder], actions)
