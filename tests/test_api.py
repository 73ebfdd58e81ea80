from io import BytesIO

from PIL import Image

import pytest
from fastapi.testclient import TestClient

from smartqr.api.main import create_app

from conftest import FALLBACK_NAME, gemini_json


@pytest.fixture
def client(settings, container):
    app = create_app(settings, container=container, warm_cache=False)
    with TestClient(app) as test_client:
        yield test_client


def test_generate_qr_success(client, vietqr_client):
    response = client.post("/api/generate-qr", json={
        "inputText": "vpbank NGUYEN TRUONG GIANG 250k tai so 1234567890",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["qrDataURL"].startswith("data:image/png;base64,")
    assert body["data"]["bankInfo"] == {
        "bankName": "Ngân hàng TMCP Việt Nam Thịnh Vượng",
        "bankCode": "VPB",
        "accountName": "NGUYEN TRUONG GIANG",
        "amount": "250000",
        "message": "",
    }
    assert vietqr_client.generate_calls[0]["acqId"] == "970432"


def test_generate_qr_fallback_name_in_summary(client, vietqr_client, gemini_client, upstream_error):
    gemini_client.response = gemini_json(amount="250000", accountNumber="1234567890")
    vietqr_client.lookup_error = upstream_error

    response = client.post("/api/generate-qr", json={"inputText": "vpbank 250k tai so 1234567890"})

    assert response.status_code == 200
    assert response.json()["data"]["bankInfo"]["accountName"] == FALLBACK_NAME


@pytest.mark.parametrize("body", [{}, {"inputText": "   "}])
def test_generate_qr_requires_input_text(client, body):
    response = client.post("/api/generate-qr", json=body)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "inputText is required"}


def test_generate_qr_missing_account_number(client, vietqr_client, gemini_client):
    gemini_client.response = gemini_json(accountName="NGUYEN VAN A", amount="250000")

    response = client.post("/api/generate-qr", json={"inputText": "vpbank NGUYEN VAN A 250k"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Account number is required" in response.json()["error"]
    assert vietqr_client.generate_calls == []


def test_generate_qr_with_separate_account_number(client, vietqr_client, gemini_client):
    gemini_client.response = gemini_json(accountName="NGUYEN VAN A", amount="500000")

    response = client.post("/api/generate-qr", json={
        "inputText": "vpbank NGUYEN VAN A 500k",
        "accountNumber": "9876543210",
    })

    assert response.status_code == 200
    assert vietqr_client.generate_calls[0]["accountNo"] == "9876543210"


def test_generate_qr_config_error_names_every_variable(client, settings, vietqr_client):
    settings.VIETQR_CLIENT_ID = ""
    settings.GEMINI_API_KEY = "your_gemini_api_key_here"

    response = client.post("/api/generate-qr", json={"inputText": "vpbank 250k tai so 1234567890"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert "VIETQR_CLIENT_ID" in error
    assert "GEMINI_API_KEY" in error
    assert "gemini-key" not in error
    assert vietqr_client.fetch_count == 0


def test_generate_qr_parse_error(client, gemini_client):
    gemini_client.response = "I could not understand the request"

    response = client.post("/api/generate-qr", json={"inputText": "hello"})

    assert response.status_code == 422
    assert response.json() == {"success": False, "error": "No JSON found in AI response"}


def test_generate_qr_upstream_error(client, vietqr_client, upstream_error):
    vietqr_client.generate_error = upstream_error

    response = client.post("/api/generate-qr", json={
        "inputText": "vpbank NGUYEN TRUONG GIANG 250k tai so 1234567890",
    })

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "VietQR API error: Service unavailable"}


def test_generate_qr_image(client):
    response = client.post("/api/generate-qr/image", json={
        "inputText": "vpbank NGUYEN TRUONG GIANG 250k tai so 1234567890",
    })

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert 'filename="vietqr_vpb.png"' in response.headers["content-disposition"]
    assert Image.open(BytesIO(response.content)).format == "PNG"


def test_list_banks(client, vietqr_client):
    response = client.get("/api/banks")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"][3]["shortName"] == "VPBank"
    assert body["data"][3]["bin"] == "970432"
    assert body["data"][3]["transferSupported"] == 1

    client.get("/api/banks")
    assert vietqr_client.fetch_count == 1


def test_list_bank_deeplinks(client, vietqr_client):
    vietqr_client.deeplink_apps = [{"appId": "vcb", "appName": "Vietcombank", "bankName": "Vietcombank",
                                    "deeplink": "https://dl.vietqr.io/pay?app=vcb", "autofill": 1,
                                    "monthlyInstall": 10}]

    response = client.get("/api/bank-deeplinks", headers={"User-Agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0)"})

    body = response.json()
    assert body["data"][0]["appId"] == "vcb"
    assert body["data"][0]["hasAutofill"] is True
    assert body["device"]["platform"] == "ios"


def test_health_reports_configuration_without_secrets(client, settings):
    settings.GEMINI_API_KEY = ""

    body = client.get("/api/health").json()

    assert body["status"] == "OK"
    assert body["services"] == {"vietqr": True, "gemini": False}
    assert "api-key" not in str(body)


def test_cache_status_and_clear(client):
    client.get("/api/banks")
    status = client.get("/api/cache/status").json()
    assert status["total_cached_banks"] == 4

    cleared = client.post("/api/cache/clear").json()
    assert cleared["details"]["cleared_banks"] == 4
    assert client.get("/api/cache/status").json()["total_cached_banks"] == 0


def test_unknown_api_route(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "API endpoint not found"}


def test_root(client):
    body = client.get("/").json()

    assert body["status"] == "healthy"
    assert body["endpoints"]["generate_qr"] == "/api/generate-qr"


@pytest.mark.parametrize("body", [{"inputText": {"text": "vpbank"}}, {"inputText": "vpbank", "accountNumber": [1]}])
def test_generate_qr_invalid_body_uses_failure_envelope(client, vietqr_client, body):
    response = client.post("/api/generate-qr", json=body)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"].startswith("Invalid request body")
    assert vietqr_client.generate_calls == []


def test_generate_qr_malformed_json_uses_failure_envelope(client):
    response = client.post("/api/generate-qr", content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_generate_qr_float_amount_is_not_inflated(client, vietqr_client, gemini_client):
    gemini_client.response = gemini_json(accountName="NGUYEN VAN A", amount=250000.0, accountNumber="1234567890")

    response = client.post("/api/generate-qr", json={"inputText": "vpbank NGUYEN VAN A 250k tai so 1234567890"})

    assert response.status_code == 200
    assert vietqr_client.generate_calls[0]["amount"] == 250000
    assert response.json()["data"]["bankInfo"]["amount"] == "250000"
