"""Tests for src.bulkload.connection covering URL building and authentication.

Run with coverage:
    pytest tests/test_bulkload_connection.py --maxfail=1 -v --cov=src.bulkload.connection --cov-report=term-missing
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.bulkload.connection import HttpConnectionFactory
from src.bulkload.errors import AuthConfigError


def test_url_and_host_name():
    factory = HttpConnectionFactory("https://search.example.org:9200/", "/registry/")
    assert factory.url == "https://search.example.org:9200/registry/_bulk?refresh=wait_for"
    assert factory.get_host_name() == "search.example.org"


def test_index_is_required():
    with pytest.raises(ValueError):
        HttpConnectionFactory("http://localhost:9200", "")


@patch("src.bulkload.connection.requests.Session")
def test_anonymous_session(mock_session):
    session = MagicMock()
    session.headers = {}
    mock_session.return_value = session

    factory = HttpConnectionFactory("http://localhost:9200", "idx", verify_tls=False)
    factory.init_auth(None)

    assert factory.create_connection() is session
    assert "Authorization" not in session.headers
    assert session.verify is False


@patch("src.bulkload.connection.requests.Session")
def test_basic_auth_from_file(mock_session, tmp_path):
    session = MagicMock()
    session.headers = {}
    mock_session.return_value = session
    auth = tmp_path / "auth.json"
    auth.write_text(json.dumps({"user": "admin", "password": "secret"}))

    factory = HttpConnectionFactory("http://localhost:9200", "idx")
    factory.init_auth(auth)
    factory.create_connection()

    assert session.auth == ("admin", "secret")


@patch("src.bulkload.connection.requests.Session")
def test_api_key_from_file(mock_session, tmp_path):
    session = MagicMock()
    session.headers = {}
    mock_session.return_value = session
    auth = tmp_path / "auth.json"
    auth.write_text(json.dumps({"api_key": "abc123"}))

    factory = HttpConnectionFactory("http://localhost:9200", "idx")
    factory.init_auth(str(auth))
    factory.create_connection()

    assert session.headers["Authorization"] == "ApiKey abc123"


def test_each_connection_is_a_new_session():
    factory = HttpConnectionFactory("http://localhost:9200", "idx")
    first = factory.create_connection()
    second = factory.create_connection()
    try:
        assert first is not second
    finally:
        first.close()
        second.close()


@pytest.mark.parametrize("content", ["not json", "[]", json.dumps({"username": "only"})])
def test_invalid_auth_file(tmp_path, content):
    auth = tmp_path / "auth.json"
    auth.write_text(content)
    factory = HttpConnectionFactory("http://localhost:9200", "idx")
    with pytest.raises(AuthConfigError):
        factory.init_auth(auth)


def test_missing_auth_file(tmp_path):
    factory = HttpConnectionFactory("http://localhost:9200", "idx")
    with pytest.raises(AuthConfigError):
        factory.init_auth(tmp_path / "missing.json")
