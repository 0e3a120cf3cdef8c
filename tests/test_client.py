"""Tests for the Cloudflare image client."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from fluxtool.image.client import send_image_request
from fluxtool.image.provider_config import IMAGE_MODEL, build_endpoint_url


class TestSendImageRequest:
    def test_posts_prompt_with_bearer_token(self, credentials, make_http_response) -> None:
        account_id, token = credentials

        with patch("fluxtool.image.client.requests.post") as mock_post:
            mock_post.return_value = make_http_response(json_body={"image": "QUJD"})
            result = send_image_request("a red fox")

        args, kwargs = mock_post.call_args
        assert args[0] == (
            f"https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{IMAGE_MODEL}"
        )
        assert kwargs["json"] == {"prompt": "a red fox"}
        assert kwargs["headers"]["Authorization"] == f"Bearer {token}"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert result.ok is True
        assert result.status_code == 200
        assert result.body == {"image": "QUJD"}

    def test_error_status_is_returned_not_raised(self, credentials, make_http_response) -> None:
        body = {"success": False, "errors": [{"code": 10000, "message": "Authentication error"}]}

        with patch("fluxtool.image.client.requests.post") as mock_post:
            mock_post.return_value = make_http_response(400, json_body=body, reason="Bad Request")
            result = send_image_request("a red fox")

        assert result.ok is False
        assert result.status_code == 400
        assert result.reason == "Bad Request"
        assert result.body == body

    def test_non_json_error_body_kept_as_text(self, credentials, make_http_response) -> None:
        with patch("fluxtool.image.client.requests.post") as mock_post:
            mock_post.return_value = make_http_response(
                502, text="<html>Bad gateway</html>", reason="Bad Gateway"
            )
            result = send_image_request("a red fox")

        assert result.ok is False
        assert result.body == "<html>Bad gateway</html>"

    def test_non_json_success_body_raises(self, credentials, make_http_response) -> None:
        with patch("fluxtool.image.client.requests.post") as mock_post:
            mock_post.return_value = make_http_response(200, text="garbage")
            with pytest.raises(RuntimeError, match="non-JSON"):
                send_image_request("a red fox")

    def test_missing_credentials_still_sends(self, monkeypatch, make_http_response) -> None:
        """Test that absent credentials surface as a provider response."""
        monkeypatch.delenv("CLOUDFLARE_ACCOUNT_ID", raising=False)
        monkeypatch.delenv("CLOUDFLARE_API_TOKEN", raising=False)

        with patch("fluxtool.image.client.requests.post") as mock_post:
            mock_post.return_value = make_http_response(401, json_body={"errors": ["auth"]})
            result = send_image_request("a red fox")

        args, kwargs = mock_post.call_args
        assert args[0] == build_endpoint_url("")
        assert kwargs["headers"]["Authorization"] == "Bearer "
        assert result.status_code == 401

    def test_connection_error_propagates(self, credentials) -> None:
        with patch(
            "fluxtool.image.client.requests.post",
            side_effect=requests.exceptions.ConnectionError("unreachable"),
        ):
            with pytest.raises(requests.exceptions.ConnectionError):
                send_image_request("a red fox")
