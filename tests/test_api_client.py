"""Tests for the booking API client (no network)."""

import pytest
import requests

from redibo.parsing.normalizer import MalformedRecordError
from redibo.reports.report_models import ReportDraft, ReportOutcome
from redibo.retrieval.api_client import MissingCredentialsError, RediboClient
from redibo.retrieval.credentials import CredentialStore

from conftest import make_raw_comment


class _Response:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json
        self.text = "" if payload is None else str(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


class _Session:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append(("GET", url, headers, params, timeout))
        return self.response

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append(("POST", url, headers, json, timeout))
        return self.response


def _client(tmp_path, response, token="secret-token"):
    store = CredentialStore(tmp_path / "credentials.yaml")
    if token:
        store.save_token(token)
    session = _Session(response)
    return RediboClient("http://api.example/", store, timeout=5, session=session), session


def test_bearer_token_is_attached(tmp_path, raw_vehicle):
    client, session = _client(tmp_path, _Response({"autos": [raw_vehicle], "total": 1}))

    fleet = client.fetch_host_vehicles(3)

    method, url, headers, _, timeout = session.calls[0]
    assert method == "GET"
    assert url == "http://api.example/api/carros/3"
    assert headers["Authorization"] == "Bearer secret-token"
    assert timeout == 5
    assert fleet.vehicles[0].id == 12


def test_missing_token_raises_before_request(tmp_path):
    client, session = _client(tmp_path, _Response([]), token=None)

    with pytest.raises(MissingCredentialsError):
        client.fetch_host_comments(3)
    assert session.calls == []


def test_comments_are_fetched_by_host_id(tmp_path):
    client, session = _client(tmp_path, _Response([make_raw_comment(1), make_raw_comment(2)]))

    comments = client.fetch_host_comments(3)

    assert [c.id for c in comments] == [1, 2]
    assert session.calls[0][1] == "http://api.example/api/comentarios-carro"
    assert session.calls[0][3] == {"hostId": 3}


def test_http_error_propagates(tmp_path):
    client, _ = _client(tmp_path, _Response({"error": "boom"}, status_code=500))

    with pytest.raises(requests.HTTPError):
        client.fetch_host_vehicles(3)


def test_invalid_json_is_malformed(tmp_path):
    client, _ = _client(tmp_path, _Response(invalid_json=True))

    with pytest.raises(MalformedRecordError):
        client.fetch_host_comments(3)


def test_envelope_without_autos_is_malformed(tmp_path):
    client, _ = _client(tmp_path, _Response({"total": 0}))

    with pytest.raises(MalformedRecordError):
        client.fetch_host_vehicles(3)


def test_profile(tmp_path):
    payload = {"id": 3, "nombre": "Luis", "email": "l@example.com", "roles": ["HOST"]}
    client, _ = _client(tmp_path, _Response(payload))

    profile = client.get_profile()

    assert profile.id == 3
    assert profile.has_role("HOST")


def test_fetch_reports_requires_list(tmp_path):
    client, _ = _client(tmp_path, _Response({"reportes": []}))

    with pytest.raises(MalformedRecordError):
        client.fetch_reports("9")


def test_submit_report_posts_payload(tmp_path):
    client, session = _client(tmp_path, _Response({"id": 1}, status_code=201))
    draft = ReportDraft(reported_id="9", reason="otro", additional_info="detalle")

    submission = client.submit_report(draft)

    method, url, headers, body, _ = session.calls[0]
    assert method == "POST"
    assert url == "http://api.example/api/reportes"
    assert headers["Content-Type"] == "application/json"
    assert body == draft.to_payload()
    assert submission.outcome is ReportOutcome.SUBMITTED


def test_submit_report_daily_limit_is_an_outcome(tmp_path):
    response = _Response({"error": "Has alcanzado el límite de reportes por día"}, status_code=429)
    client, _ = _client(tmp_path, response)

    submission = client.submit_report(ReportDraft(reported_id="9", reason="otro"))

    assert submission.outcome is ReportOutcome.DAILY_LIMIT_REACHED


def test_from_config(tmp_path):
    store = CredentialStore(tmp_path / "c.yaml")
    config = {"api": {"base_url": "https://redibo.example", "timeout_seconds": 7}}

    client = RediboClient.from_config(config, store)

    assert client.base_url == "https://redibo.example"
    assert client.timeout == 7
