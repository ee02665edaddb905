# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from gridsync.core._http import _HttpClient


class TestHttpClientRetryLogic:
    """Retry and timeout behavior of _HttpClient."""

    def test_default_configuration(self):
        """A failed request is not repeated unless retries are configured."""
        client = _HttpClient()
        assert client.max_attempts == 1
        assert client.base_delay == 0.5
        assert client.default_timeout is None

    def test_custom_configuration(self):
        client = _HttpClient(retries=3, backoff=1.0, timeout=12)
        assert client.max_attempts == 4
        assert client.base_delay == 1.0
        assert client.default_timeout == 12

    @patch("requests.request")
    def test_successful_request_no_retry(self, mock_request):
        mock_request.return_value = Mock(status_code=200)

        response = _HttpClient()._request("GET", "https://test.example.com")

        assert response.status_code == 200
        assert mock_request.call_count == 1

    @patch("requests.request")
    @patch("time.sleep")
    def test_network_error_propagates_without_retries(self, mock_sleep, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("Network error")

        with pytest.raises(requests.exceptions.ConnectionError):
            _HttpClient()._request("GET", "https://test.example.com")

        assert mock_request.call_count == 1
        mock_sleep.assert_not_called()

    @patch("requests.request")
    @patch("time.sleep")
    def test_network_error_retry(self, mock_sleep, mock_request):
        mock_request.side_effect = [
            requests.exceptions.ConnectionError("Network error"),
            requests.exceptions.ConnectionError("Network error"),
            Mock(status_code=200),
        ]

        response = _HttpClient(retries=2)._request("GET", "https://test.example.com")

        assert response.status_code == 200
        assert mock_request.call_count == 3
        # Exponential backoff: 0.5, 1.0
        mock_sleep.assert_any_call(0.5)
        mock_sleep.assert_any_call(1.0)

    @patch("requests.request")
    def test_error_status_is_not_retried(self, mock_request):
        mock_request.return_value = Mock(status_code=503, headers={})

        response = _HttpClient(retries=3)._request("GET", "https://test.example.com")

        assert response.status_code == 503
        assert mock_request.call_count == 1

    @patch("requests.request")
    def test_method_default_timeouts(self, mock_request):
        mock_request.return_value = Mock(status_code=200)
        client = _HttpClient()

        client._request("get", "https://x")
        client._request("post", "https://x")

        assert mock_request.call_args_list[0].kwargs["timeout"] == 10
        assert mock_request.call_args_list[1].kwargs["timeout"] == 120

    @patch("requests.request")
    def test_explicit_timeout_wins(self, mock_request):
        mock_request.return_value = Mock(status_code=200)

        _HttpClient(timeout=3)._request("post", "https://x", timeout=7)

        assert mock_request.call_args.kwargs["timeout"] == 7

    def test_uses_session_when_given(self):
        session = MagicMock(spec=requests.Session)
        session.request.return_value = Mock(status_code=200)
        client = _HttpClient(session=session)

        client._request("get", "https://x")
        client.close()

        session.request.assert_called_once()
        session.close.assert_called_once()
        assert client._session is None
