from unittest.mock import patch

import pytest
from starlette.testclient import TestClient

from solhttp.helpers import keypair_from_base58
from solhttp.server import create_app, main
from solhttp.solana import SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID, Keypair


@pytest.fixture
def client():
    return TestClient(create_app())


def _address() -> str:
    return str(Keypair.generate().pubkey())


def test_keypair_endpoint_returns_matching_pair(client):
    response = client.post("/keypair")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "error" not in body
    encoded_keypair = body["data"]["secret"]
    assert str(keypair_from_base58(encoded_keypair).pubkey()) == body["data"]["pubkey"]


def test_sign_then_verify_round_trip(client):
    keypair_body = client.post("/keypair").json()["data"]
    signed = client.post(
        "/message/sign",
        json={"message": "hello world", "secret": keypair_body["secret"]},
    )
    assert signed.status_code == 200
    signed_data = signed.json()["data"]
    assert signed_data["pubkey"] == keypair_body["pubkey"]
    assert signed_data["message"] == "hello world"

    verified = client.post(
        "/message/verify",
        json={
            "message": "hello world",
            "signature": signed_data["signature"],
            "pubkey": signed_data["pubkey"],
        },
    )
    assert verified.status_code == 200
    assert verified.json()["data"] == {
        "valid": True,
        "message": "hello world",
        "pubkey": signed_data["pubkey"],
    }


def test_verify_with_other_message_is_invalid(client):
    keypair_body = client.post("/keypair").json()["data"]
    signature = client.post(
        "/message/sign", json={"message": "first", "secret": keypair_body["secret"]}
    ).json()["data"]["signature"]
    verified = client.post(
        "/message/verify",
        json={"message": "second", "signature": signature, "pubkey": keypair_body["pubkey"]},
    )
    assert verified.json()["data"]["valid"] is False


def test_handler_error_is_bad_request_envelope(client):
    response = client.post("/message/sign", json={"secret": "secret"})
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Please provide a message to sign",
    }


def test_create_token_response_shape(client):
    response = client.post(
        "/token/create",
        json={"mintAuthority": _address(), "mint": _address(), "decimals": 6},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["program_id"] == str(TOKEN_PROGRAM_ID)
    assert len(data["accounts"]) == 2
    assert set(data["accounts"][0]) == {"pubkey", "is_signer", "is_writable"}


def test_mint_token_endpoint(client):
    authority = _address()
    response = client.post(
        "/token/mint",
        json={"mint": _address(), "destination": _address(), "authority": authority, "amount": 10},
    )
    data = response.json()["data"]
    assert data["accounts"][2] == {"pubkey": authority, "is_signer": True, "is_writable": False}


def test_send_sol_endpoint(client):
    sender, recipient = _address(), _address()
    response = client.post(
        "/send/sol", json={"from": sender, "to": recipient, "lamports": 100}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["program_id"] == str(SYSTEM_PROGRAM_ID)
    assert data["accounts"] == [sender, recipient]


def test_send_token_endpoint_uses_camel_case_signer(client):
    owner = _address()
    response = client.post(
        "/send/token",
        json={"destination": _address(), "mint": _address(), "owner": owner, "amount": 5},
    )
    assert response.status_code == 200
    accounts = response.json()["data"]["accounts"]
    assert accounts[0] == {"pubkey": owner, "isSigner": False}
    assert accounts[2] == {"pubkey": owner, "isSigner": True}


def test_invalid_json_is_bad_request(client):
    response = client.post(
        "/send/sol", content=b"{", headers={"content-type": "application/json"}
    )
    assert response.status_code == 400


def test_wrong_field_type_is_unprocessable(client):
    response = client.post("/send/sol", json={"from": "a", "to": "b", "lamports": "many"})
    assert response.status_code == 422


def test_missing_content_type_is_unsupported(client):
    response = client.post("/send/sol", content=b"{}")
    assert response.status_code == 415


def test_get_is_not_allowed(client):
    response = client.get("/keypair")
    assert response.status_code == 405


def test_cors_allows_any_origin(client):
    response = client.post("/keypair", headers={"origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_main_runs_uvicorn_with_defaults(capsys):
    with patch("uvicorn.run") as run:
        main([])
    assert run.call_count == 1
    assert run.call_args.kwargs == {"host": "0.0.0.0", "port": 8084}
    assert "http://0.0.0.0:8084" in capsys.readouterr().out


def test_main_accepts_port_option(capsys):
    with patch("uvicorn.run") as run:
        main(["--host", "127.0.0.1", "--port", "9000"])
    assert run.call_args.kwargs == {"host": "127.0.0.1", "port": 9000}
    assert "http://127.0.0.1:9000" in capsys.readouterr().out