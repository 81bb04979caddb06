"""Tests for the record source adapters."""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
import requests

from itemgroups.adapters.errors import (
    FetchError,
    MalformedResponseError,
    ServerError,
    TransportError,
)
from itemgroups.adapters.hiring_api import HiringApiSource, parse_records
from itemgroups.adapters.json_file import JsonFileSource
from itemgroups.config import Config
from itemgroups.core.records import Record


SAMPLE_PAYLOAD = [
    {"id": 755, "listId": 2, "name": ""},
    {"id": 203, "listId": 2, "name": ""},
    {"id": 684, "listId": 1, "name": "Item 684"},
    {"id": 276, "listId": 1, "name": "Item 276"},
    {"id": 736, "listId": 3, "name": None},
    {"id": 926, "listId": 4, "name": None},
    {"id": 808, "listId": 4, "name": "Item 808"},
]


def make_response(status_code=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.content = b"[]"
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def source(session):
    return HiringApiSource(Config(), session=session)


def fetch(source):
    return asyncio.run(source.fetch_all())


class TestParseRecords:
    def test_keeps_invalid_names(self):
        records = parse_records(SAMPLE_PAYLOAD)
        assert len(records) == 7
        assert records[0] == Record(id=755, group_key=2, name="")
        assert records[4].name is None

    def test_null_payload_is_empty(self):
        assert parse_records(None) == []

    def test_object_payload_rejected(self):
        with pytest.raises(MalformedResponseError, match="JSON array"):
            parse_records({"items": []})

    def test_bad_element_reports_index(self):
        payload = [{"id": 1, "listId": 1, "name": "a"}, {"id": 2, "name": "b"}]
        with pytest.raises(MalformedResponseError, match="index 1"):
            parse_records(payload)


class TestHiringApiSource:
    def test_url_from_config(self):
        source = HiringApiSource(Config(api_base_url="http://localhost:8000/"), session=MagicMock())
        assert source.url == "http://localhost:8000/hiring.json"

    def test_fetch_all_gets_endpoint(self, source, session):
        session.get.return_value = make_response(payload=SAMPLE_PAYLOAD)

        records = fetch(source)

        session.get.assert_called_once_with(
            "https://hiring.fetch.com/hiring.json",
            timeout=(30.0, 30.0),
        )
        assert [r.id for r in records] == [755, 203, 684, 276, 736, 926, 808]

    def test_uses_configured_timeouts(self, session):
        source = HiringApiSource(Config(connect_timeout=5, read_timeout=10), session=session)
        session.get.return_value = make_response(payload=[])
        fetch(source)
        assert session.get.call_args.kwargs["timeout"] == (5, 10)

    def test_server_error(self, source, session):
        session.get.return_value = make_response(status_code=500)

        with pytest.raises(ServerError) as exc_info:
            fetch(source)

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "API Error: 500"

    def test_not_found_is_server_error(self, source, session):
        session.get.return_value = make_response(status_code=404)
        with pytest.raises(ServerError, match="404"):
            fetch(source)

    def test_connection_error(self, source, session):
        session.get.side_effect = requests.ConnectionError("Name or service not known")
        with pytest.raises(TransportError, match="Could not connect"):
            fetch(source)

    def test_timeout(self, source, session):
        session.get.side_effect = requests.Timeout()
        with pytest.raises(TransportError, match="timed out"):
            fetch(source)

    def test_other_request_exception(self, source, session):
        session.get.side_effect = requests.TooManyRedirects("loop")
        with pytest.raises(TransportError):
            fetch(source)

    def test_invalid_json(self, source, session):
        session.get.return_value = make_response(json_error=ValueError("Expecting value"))
        with pytest.raises(MalformedResponseError, match="not valid JSON"):
            fetch(source)

    def test_null_body(self, source, session):
        session.get.return_value = make_response(payload=None)
        assert fetch(source) == []

    def test_errors_share_base_class(self, source, session):
        session.get.return_value = make_response(status_code=502)
        with pytest.raises(FetchError):
            fetch(source)

    def test_close_closes_session(self, source, session):
        source.close()
        session.close.assert_called_once()


class TestJsonFileSource:
    def test_reads_records(self, tmp_path):
        path = tmp_path / "hiring.json"
        path.write_text(json.dumps(SAMPLE_PAYLOAD))

        records = asyncio.run(JsonFileSource(path).fetch_all())

        assert len(records) == 7
        assert records[2] == Record(id=684, group_key=1, name="Item 684")

    def test_missing_file(self, tmp_path):
        source = JsonFileSource(tmp_path / "missing.json")
        with pytest.raises(TransportError, match="Could not read"):
            asyncio.run(source.fetch_all())

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(MalformedResponseError):
            asyncio.run(JsonFileSource(path).fetch_all())

    def test_rereads_on_each_fetch(self, tmp_path):
        path = tmp_path / "hiring.json"
        path.write_text("[]")
        source = JsonFileSource(path)
        assert asyncio.run(source.fetch_all()) == []

        path.write_text(json.dumps([{"id": 1, "listId": 1, "name": "a"}]))
        assert len(asyncio.run(source.fetch_all())) == 1

    def test_close_is_safe(self, tmp_path):
        JsonFileSource(tmp_path / "hiring.json").close()


class TestHiringApiSourceContext:
    def test_context_manager_closes_session(self, session):
        with HiringApiSource(Config(), session=session) as source:
            assert isinstance(source, HiringApiSource)
        session.close.assert_called_once()
