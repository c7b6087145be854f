"""
Tests for the Satispay HTTP transport

The sync path runs on a mocked requests session and the async path on a
mocked httpx client, so no network calls are made.
"""

import base64
import json

import httpx
import pytest
import requests
from unittest.mock import AsyncMock, MagicMock, Mock, patch

from satispay_sdk.config import ApiConfig, Credentials
from satispay_sdk.exceptions import ApiError, ServerCommunicationError, SigningError, ValidationError
from satispay_sdk.http_client import (
    SatispayHttpClient,
    serialize_body,
    parse_response_body,
    build_api_error,
    HEADER_IDEMPOTENCY_KEY,
)
from satispay_sdk.signing import calculate_digest
from satispay_sdk.types import PaymentAction, PaymentFlow


def make_response(status_code=200, text='{}'):
    response = Mock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def mock_session():
    """Mock requests session returning an empty JSON object."""
    session = MagicMock()
    session.request.return_value = make_response()
    return session


@pytest.fixture
def signed_config(credentials):
    return ApiConfig(environment="staging", credentials=credentials)


class TestBodyHelpers:
    """Test serialization and response parsing helpers"""

    def test_serialize_is_compact_and_keeps_unicode(self):
        assert serialize_body({"a": 1, "b": "é"}) == '{"a":1,"b":"é"}'

    def test_serialize_enum_values(self):
        body = {"flow": PaymentFlow.MATCH_CODE, "action": PaymentAction.ACCEPT}
        assert serialize_body(body) == '{"flow":"MATCH_CODE","action":"ACCEPT"}'

    def test_serialize_keeps_strings(self):
        assert serialize_body('{"a": 1}') == '{"a": 1}'

    def test_serialize_rejects_unserializable(self):
        with pytest.raises(ValidationError):
            serialize_body({"a": object()})

    def test_parse_response_body(self):
        assert parse_response_body('{"id":"1"}') == {"id": "1"}
        assert parse_response_body("OK") == "OK"
        assert parse_response_body("") == ""

    def test_api_error_with_request_id(self):
        error = build_api_error(400, {"message": "Invalid body", "code": 36, "wlt": "req-1"})

        assert str(error) == "Invalid body, request id: req-1"
        assert error.http_status == 400
        assert error.code == "36"
        assert error.request_id == "req-1"

    def test_api_error_without_details(self):
        error = build_api_error(502, "Bad gateway")

        assert str(error) == "HTTP status is not 2xx: 502"
        assert error.code is None
        assert error.request_id is None

    def test_api_error_requires_all_fields(self):
        error = build_api_error(403, {"message": "Forbidden", "code": 1})
        assert str(error) == "HTTP status is not 2xx: 403"


class TestPrepare:
    """Test request preparation"""

    def test_base_headers(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        call = client.prepare("GET", "/g_business/v1/payments/1")

        assert call.url == "https://authservices.satispay.com/g_business/v1/payments/1"
        assert call.headers["Accept"] == "application/json"
        assert call.headers["User-Agent"] == ApiConfig().user_agent
        assert call.body is None
        assert "Content-Type" not in call.headers

    def test_identification_headers(self, mock_session, static_rsa_service):
        config = ApiConfig(
            platform="Magento",
            platform_version="2.4",
            plugin_name="satispay-magento",
            plugin_version="1.0.0",
            device_type="ECOMMERCE",
            tracking_code="track-1",
        )
        client = SatispayHttpClient(config, rsa_service=static_rsa_service, session=mock_session)
        headers = client.prepare("GET", "/p").headers

        assert headers["x-satispay-os"] == "Magento"
        assert headers["x-satispay-osv"] == "2.4"
        assert headers["x-satispay-appn"] == "satispay-magento"
        assert headers["x-satispay-appv"] == "1.0.0"
        assert headers["x-satispay-devicetype"] == "ECOMMERCE"
        assert headers["x-satispay-tracking-code"] == "track-1"

    def test_unset_identification_headers_are_omitted(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        headers = client.prepare("GET", "/p").headers
        assert not [name for name in headers if name.startswith("x-satispay")]

    def test_body_serialized_once(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        call = client.prepare("POST", "/p", body={"description": "caffè", "amount_unit": 100})

        assert call.body == '{"description":"caffè","amount_unit":100}'
        assert call.headers["Content-Type"] == "application/json"
        assert call.headers["Content-Length"] == str(len(call.body.encode("utf-8")))
        assert call.content == call.body.encode("utf-8")

    def test_get_never_has_body(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        call = client.prepare("GET", "/p", body={"ignored": True})

        assert call.body is None
        assert "Content-Length" not in call.headers

    def test_caller_headers_are_kept(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        call = client.prepare("POST", "/p", body={}, headers={HEADER_IDEMPOTENCY_KEY: "key-1"})

        assert call.headers[HEADER_IDEMPOTENCY_KEY] == "key-1"
        assert call.body == "{}"

    def test_signed_request(self, mock_session, signed_config):
        client = SatispayHttpClient(signed_config, session=mock_session)
        call = client.prepare("POST", "/g_business/v1/payments", body={"flow": "MATCH_CODE"}, sign=True)

        assert call.is_signed
        assert call.headers["Digest"] == calculate_digest(call.body)
        assert 'keyId="abc123"' in call.headers["Authorization"]
        assert "content-length" in call.headers["Authorization"]

    def test_signed_headers_override_caller_headers(self, mock_session, signed_config):
        client = SatispayHttpClient(signed_config, session=mock_session)
        call = client.prepare(
            "GET", "/p",
            headers={"date": "stale", "digest": "SHA-256=forged", "authorization": "Bearer x"},
            sign=True
        )

        lowered = {name.lower(): value for name, value in call.headers.items()}
        assert len([n for n in call.headers if n.lower() == "date"]) == 1
        assert lowered["digest"] == calculate_digest("")
        assert lowered["authorization"].startswith("Signature ")
        assert lowered["date"] != "stale"

    def test_sign_false_sends_unsigned(self, mock_session, signed_config):
        client = SatispayHttpClient(signed_config, session=mock_session)
        assert not client.prepare("GET", "/p").is_signed

    def test_missing_credentials_sends_unsigned(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)
        call = client.prepare("GET", "/p", sign=True)

        assert not call.is_signed
        assert "Digest" not in call.headers
        assert static_rsa_service.signed_messages == []

    def test_signing_failure_is_not_downgraded(self, mock_session):
        config = ApiConfig(credentials=Credentials(private_key="garbage", key_id="abc123"))
        client = SatispayHttpClient(config, session=mock_session)

        with pytest.raises(SigningError):
            client.request("GET", "/p", sign=True)
        mock_session.request.assert_not_called()


class TestSyncTransport:
    """Test requests based transport"""

    def test_sends_the_digested_payload(self, mock_session, signed_config):
        client = SatispayHttpClient(signed_config, session=mock_session)
        client.post("/g_business/v1/payments", body={"flow": "MATCH_CODE", "amount_unit": 100}, sign=True)

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://staging.authservices.satispay.com/g_business/v1/payments")
        assert kwargs["data"] == b'{"flow":"MATCH_CODE","amount_unit":100}'
        assert kwargs["headers"]["Digest"] == calculate_digest(kwargs["data"])
        assert kwargs["headers"]["Content-Length"] == str(len(kwargs["data"]))
        assert kwargs["timeout"] == signed_config.timeout
        assert kwargs["verify"] is True

    def test_returns_parsed_json(self, mock_session, static_rsa_service):
        mock_session.request.return_value = make_response(200, '{"id":"payment-1"}')
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        assert client.get("/p") == {"id": "payment-1"}

    def test_returns_text_for_non_json(self, mock_session, static_rsa_service):
        mock_session.request.return_value = make_response(204, "")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        assert client.delete("/p") == ""

    def test_api_error(self, mock_session, static_rsa_service):
        mock_session.request.return_value = make_response(
            400, json.dumps({"message": "Amount not valid", "code": 36, "wlt": "abc-wlt"})
        )
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ApiError) as exc_info:
            client.post("/p", body={"amount_unit": -1})

        assert str(exc_info.value) == "Amount not valid, request id: abc-wlt"
        assert exc_info.value.http_status == 400
        assert exc_info.value.request_id == "abc-wlt"

    def test_generic_http_error(self, mock_session, static_rsa_service):
        mock_session.request.return_value = make_response(500, "Internal Server Error")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ApiError, match="HTTP status is not 2xx: 500"):
            client.get("/p")

    def test_no_retry_on_failure(self, mock_session, static_rsa_service):
        mock_session.request.return_value = make_response(503, "")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ApiError):
            client.get("/p")
        assert mock_session.request.call_count == 1

    def test_timeout(self, mock_session, static_rsa_service):
        mock_session.request.side_effect = requests.exceptions.Timeout("slow")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ServerCommunicationError) as exc_info:
            client.get("/p")
        assert exc_info.value.error_code == "TIMEOUT"

    def test_connection_error(self, mock_session, static_rsa_service):
        mock_session.request.side_effect = requests.exceptions.ConnectionError("refused")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ServerCommunicationError) as exc_info:
            client.get("/p")
        assert not isinstance(exc_info.value, ApiError)
        assert exc_info.value.error_code == "CONNECTION_ERROR"

    def test_injected_session_without_requests(self, mock_session, static_rsa_service):
        mock_session.request.side_effect = OSError("socket closed")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with patch("satispay_sdk.http_client.REQUESTS_AVAILABLE", False), \
                patch("satispay_sdk.http_client.requests", None):
            with pytest.raises(OSError, match="socket closed"):
                client.get("/p")

    def test_shortcuts_use_method(self, mock_session, static_rsa_service):
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        client.put("/p", body={"a": 1})
        client.patch("/p", body={"a": 1})

        methods = [call.args[0] for call in mock_session.request.call_args_list]
        assert methods == ["PUT", "PATCH"]

    def test_context_manager_closes_session(self, mock_session, static_rsa_service):
        with SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session):
            pass
        mock_session.close.assert_called_once()


class TestAsyncTransport:
    """Test httpx based transport"""

    @pytest.fixture
    def async_client(self):
        client = Mock()
        client.request = AsyncMock(return_value=make_response(200, '{"id":"payment-1"}'))
        return client

    @pytest.mark.asyncio
    async def test_request_async(self, mock_session, signed_config, async_client):
        client = SatispayHttpClient(signed_config, session=mock_session)
        result = await client.post_async(
            "/g_business/v1/payments", body={"flow": "MATCH_CODE"}, sign=True, client=async_client
        )

        assert result == {"id": "payment-1"}
        args, kwargs = async_client.request.call_args
        assert args[0] == "POST"
        assert kwargs["content"] == b'{"flow":"MATCH_CODE"}'
        assert kwargs["headers"]["Digest"] == calculate_digest(kwargs["content"])
        mock_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_request_async_signature_is_base64(self, mock_session, signed_config, async_client):
        client = SatispayHttpClient(signed_config, session=mock_session)
        await client.get_async("/p", sign=True, client=async_client)

        authorization = async_client.request.call_args.kwargs["headers"]["Authorization"]
        signature = authorization.split('signature="')[1].rstrip('"')
        assert base64.b64decode(signature)

    @pytest.mark.asyncio
    async def test_async_api_error(self, mock_session, static_rsa_service, async_client):
        async_client.request.return_value = make_response(
            404, json.dumps({"message": "Not found", "code": 41, "wlt": "wlt-404"})
        )
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ApiError) as exc_info:
            await client.get_async("/p", client=async_client)
        assert exc_info.value.request_id == "wlt-404"

    @pytest.mark.asyncio
    async def test_async_network_error(self, mock_session, static_rsa_service, async_client):
        async_client.request.side_effect = httpx.ConnectError("refused")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ServerCommunicationError):
            await client.get_async("/p", client=async_client)

    @pytest.mark.asyncio
    async def test_async_timeout(self, mock_session, static_rsa_service, async_client):
        async_client.request.side_effect = httpx.ReadTimeout("slow")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with pytest.raises(ServerCommunicationError) as exc_info:
            await client.get_async("/p", client=async_client)
        assert exc_info.value.error_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_injected_client_without_httpx(self, mock_session, static_rsa_service, async_client):
        async_client.request.side_effect = OSError("socket closed")
        client = SatispayHttpClient(ApiConfig(), rsa_service=static_rsa_service, session=mock_session)

        with patch("satispay_sdk.http_client.HTTPX_AVAILABLE", False), \
                patch("satispay_sdk.http_client.httpx", None):
            with pytest.raises(OSError, match="socket closed"):
                await client.get_async("/p", client=async_client)

    @pytest.mark.asyncio
    async def test_owned_async_client(self, mock_session, static_rsa_service, async_client):
        client = SatispayHttpClient(ApiConfig(timeout=5), rsa_service=static_rsa_service, session=mock_session)

        with patch("satispay_sdk.http_client.httpx.AsyncClient") as client_cls:
            client_cls.return_value.__aenter__.return_value = async_client
            result = await client.request_async("GET", "/p")

        assert result == {"id": "payment-1"}
        client_cls.assert_called_once_with(timeout=5, verify=True)
