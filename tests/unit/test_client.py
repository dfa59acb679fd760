"""Tests for the payment initiation client."""

import json

import jwt

from glocal_jose.client import INITIATE_PATH, TOKEN_HEADER, PaymentClient
from glocal_jose.contracts import TokenResult


class Resp:
    def __init__(self, status_code=200, text='{"status":"CREATED"}', headers=None):
        self.status_code = status_code
        self.text = text
        self.headers = headers if headers is not None else {"Content-Type": "application/json"}


def test_send_posts_jwe_body_and_jws_header(monkeypatch):
    calls = {}

    def fake_post(url, data=None, headers=None, timeout=None):
        calls.update(url=url, data=data, headers=headers, timeout=timeout)
        return Resp()

    monkeypatch.setattr("requests.post", fake_post)

    client = PaymentClient(base_url="https://api.example.test/", timeout=5)
    response = client.send(TokenResult(jwe="a.b.c.d.e", jws="x.y.z"))

    assert calls["url"] == "https://api.example.test" + INITIATE_PATH
    assert calls["data"] == b"a.b.c.d.e"
    assert calls["headers"][TOKEN_HEADER] == "x.y.z"
    assert calls["headers"]["Content-Type"].startswith("text/plain")
    assert calls["timeout"] == 5
    assert response.status_code == 200
    assert response.body == '{"status":"CREATED"}'


def test_error_response_passed_through(monkeypatch):
    monkeypatch.setattr(
        "requests.post",
        lambda url, **kwargs: Resp(status_code=401, text="denied", headers={}),
    )

    response = PaymentClient().send(TokenResult(jwe="a.b.c.d.e", jws="x.y.z"))

    assert response.status_code == 401
    assert response.body == "denied"
    assert response.content_type == "application/json"


def test_initiate_generates_tokens(monkeypatch, token_config, rsa_key, decrypt_jwe):
    sent = {}

    def fake_post(url, data=None, headers=None, timeout=None):
        sent.update(data=data, headers=headers)
        return Resp()

    monkeypatch.setattr("requests.post", fake_post)

    PaymentClient().initiate({"amount": 100}, token_config)

    jwe = sent["data"].decode("ascii")
    assert decrypt_jwe(jwe) == b'{"amount":100}'
    payload = json.loads(
        jwt.PyJWS().decode(
            sent["headers"][TOKEN_HEADER], rsa_key.public_key(), algorithms=["RS256"]
        )
    )
    assert payload["digestAlgorithm"] == "SHA-256"
