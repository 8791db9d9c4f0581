import sys
import os
import io
import json
import urllib.error
from datetime import datetime, timedelta, timezone
from email.message import Message

import pytest

# Pfade sofort setzen, nicht erst in einer Fixture!
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
SRC_DIR = os.path.join(BASE_DIR, 'eolia-skill-smarthome', 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

os.environ.setdefault("USER_ID", "test@example.com")
os.environ.setdefault("PASSWORD", "secret")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")

from eolia_client import EoliaClient  # noqa: E402
from eolia_config import EoliaConfig  # noqa: E402
from eolia_session import EoliaSession  # noqa: E402
from eolia_status import EoliaStatus  # noqa: E402
from status_store import StatusStore  # noqa: E402

JST = timezone(timedelta(hours=9))
APPLIANCE_ID = "AC-0001"


def make_status(**fields):
    record = {
        "appliance_id": APPLIANCE_ID,
        "operation_status": False,
        "operation_mode": "Stop",
        "temperature": 20,
        "inside_temp": 27.5,
        "inside_humidity": 55,
        "outside_temp": 31,
        "wind_volume": 0,
        "air_flow": "not_set",
        "wind_direction": 0,
        "wind_direction_horizon": "auto",
        "timer_value": 0,
        "nanoex": False,
        "ai_control": "off",
        "airquality": False,
        "operation_token": None,
    }
    record.update(fields)
    return record


# --- DynamoDB ---

class FakeTable:
    def __init__(self, name):
        self.name = name
        self.items = {}
        self.puts = []
        self.fail_puts = None

    def get_item(self, Key):
        item = self.items.get(Key["id"])
        return {"Item": item} if item is not None else {}

    def put_item(self, Item):
        if self.fail_puts:
            raise self.fail_puts
        self.puts.append(Item)
        self.items[Item["id"]] = Item
        return {}


class FakeDynamoDB:
    def __init__(self):
        self.tables = {}

    def Table(self, name):
        return self.tables.setdefault(name, FakeTable(name))


# --- Eolia API ---

class FakeEoliaClient:
    """Eolia Cloud im Speicher. Jeder Schreibvorgang liefert ein neues Operation-Token."""

    def __init__(self, statuses=None):
        self.statuses = statuses or {}
        self.access_token = "session-1"
        self.operations = []
        self.status_reads = 0
        self.error = None
        self.devices = []

    def get_devices(self):
        return self.devices

    def get_device_status(self, appliance_id):
        self.status_reads += 1
        return EoliaStatus(dict(self.statuses[appliance_id], operation_token=None))

    def set_device_status(self, operation):
        self.operations.append(dict(operation))
        if self.error:
            raise self.error
        token = f"op-{len(self.operations)}"
        record = dict(self.statuses.get(operation["appliance_id"], {}), **operation)
        record["operation_token"] = token
        self.statuses[operation["appliance_id"]] = record
        return EoliaStatus(record)

    create_operation = staticmethod(EoliaClient.create_operation)


class FakeResponse:
    def __init__(self, body=None, cookies=()):
        self.body = json.dumps(body).encode("utf-8") if body is not None else b""
        self.headers = Message()
        for cookie in cookies:
            self.headers["Set-Cookie"] = cookie

    def read(self):
        return self.body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


def http_error(url, code, body=b""):
    return urllib.error.HTTPError(url, code, "error", Message(), io.BytesIO(body))


class FakeOpener:
    """Ersetzt den urllib-Opener. `replies` sind FakeResponse oder Exceptions, in Reihenfolge."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    def open(self, req, timeout=None):
        self.requests.append(req)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return Clock(datetime(2026, 7, 15, 9, 0, tzinfo=JST))


@pytest.fixture
def config():
    return EoliaConfig("test@example.com", "secret")


@pytest.fixture
def dynamodb():
    return FakeDynamoDB()


@pytest.fixture
def store(config, dynamodb):
    return StatusStore(config, dynamodb=dynamodb)


@pytest.fixture
def eolia():
    return FakeEoliaClient({APPLIANCE_ID: make_status()})


@pytest.fixture
def session(config, eolia, store, clock):
    return EoliaSession(config, client=eolia, store=store, clock=clock)
