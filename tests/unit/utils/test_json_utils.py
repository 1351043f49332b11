"""
Tests for json_utils, used to serialize log entries for the queue.
"""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import BaseModel

from saas_admin_core.enums import ConfigType
from saas_admin_core.utils.json_utils import dumps, loads


class SampleModel(BaseModel):
    name: str
    value: int


class TestEnhancedJSONEncoder:
    def test_encode_decimal(self):
        result = dumps({"price": Decimal("19.99")})
        assert result == '{"price": 19.99}'

    def test_encode_datetime_and_date(self):
        result = dumps({"at": datetime(2024, 5, 1, 10, 30), "on": date(2024, 5, 1)})
        assert json.loads(result) == {"at": "2024-05-01T10:30:00", "on": "2024-05-01"}

    def test_encode_enum(self):
        assert dumps({"scope": ConfigType.TENANT}) == '{"scope": "tenant"}'

    def test_encode_pydantic_model(self):
        assert dumps({"model": SampleModel(name="s3", value=1)}) == '{"model": {"name": "s3", "value": 1}}'

    def test_encode_set_sorted(self):
        assert dumps({"codes": {"google_oauth2", "google"}}) == '{"codes": ["google", "google_oauth2"]}'

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            dumps({"obj": object()})


def test_loads():
    assert loads('{"a": 1}') == {"a": 1}
