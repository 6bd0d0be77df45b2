"""
Tests for liveness routes, CORS handling and error mapping.
"""

import logging
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from conftest import auth_header, make_engine, make_settings
from main import create_app


class TestHealth:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {
            "message": "Phonebook API is running!",
            "version": "1.0.0",
            "status": "OK",
        }

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "OK"

    def test_process_time_header(self, client):
        assert "x-process-time" in client.get("/health").headers


class TestCors:
    def test_allowed_origin_is_echoed(self, client):
        resp = client.get("/health", headers={"Origin": "http://localhost:3000"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_unknown_origin_gets_no_allow_origin(self, client):
        resp = client.get("/health", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_preflight_is_empty_200(self, client):
        resp = client.options(
            "/contacts",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "Authorization" in resp.headers["access-control-allow-headers"]
        assert "DELETE" in resp.headers["access-control-allow-methods"]

    def test_error_responses_carry_cors_headers(self, client):
        resp = client.get("/contacts", headers={"Origin": "http://localhost:3000"})
        assert resp.status_code == 401
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrorMapping:
    def test_invalid_json_is_bad_request(self, client):
        resp = client.post(
            "/users/signup",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "message" in resp.json()

    def test_unexpected_failure_is_json_500_with_cors(self, client, ann_token):
        headers = {**auth_header(ann_token), "Origin": "http://localhost:3000"}
        with patch("api.contacts.list_contacts", side_effect=RuntimeError("boom")):
            resp = client.get("/contacts", headers=headers)
        assert resp.status_code == 500
        assert resp.json() == {"message": "boom"}
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_store_failure_surfaces_message(self, client, ann_token):
        failure = OperationalError("SELECT", {}, Exception("connection lost"))
        with patch("api.contacts.list_contacts", side_effect=failure):
            resp = client.get("/contacts", headers=auth_header(ann_token))
        assert resp.status_code == 500
        assert "connection lost" in resp.json()["message"]


class TestLogging:
    def test_create_app_configures_logging(self):
        with patch("main.logging.basicConfig") as basic_config:
            create_app(make_settings(), engine=make_engine())
        assert basic_config.call_args.kwargs["level"] == logging.INFO

    def test_debug_switches_to_debug_level(self):
        with patch("main.logging.basicConfig") as basic_config:
            create_app(make_settings(debug=True), engine=make_engine())
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
