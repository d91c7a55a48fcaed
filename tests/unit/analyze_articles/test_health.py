"""Tests for analyze_articles.health module."""

from unittest.mock import Mock, patch

import requests

from analyze_articles.errors import AuthError
from analyze_articles.health import check_api_health


def _token_manager() -> Mock:
    manager = Mock()
    manager.get_token.return_value = "tok"
    return manager


class TestCheckApiHealth:
    def test_healthy(self) -> None:
        session = Mock()
        session.get.return_value = Mock(status_code=200)

        status = check_api_health("https://core.example", _token_manager(), session, timeout=2)

        assert status.healthy
        assert status.status_code == 200
        session.get.assert_called_once_with(
            "https://core.example/health",
            headers={"Authorization": "Bearer tok"},
            timeout=2,
        )

    def test_error_status_unhealthy(self) -> None:
        session = Mock()
        response = Mock(status_code=500)
        response.raise_for_status.side_effect = requests.HTTPError("500", response=response)
        session.get.return_value = response

        status = check_api_health("https://core.example", _token_manager(), session)

        assert not status.healthy
        assert status.status_code == 500

    def test_connection_error_unhealthy(self) -> None:
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")

        status = check_api_health("https://core.example", _token_manager(), session)

        assert not status.healthy
        assert status.status_code is None
        assert "refused" in status.error

    def test_auth_failure_unhealthy(self) -> None:
        manager = Mock()
        manager.get_token.side_effect = AuthError("no token")

        status = check_api_health("https://core.example", manager, Mock())

        assert not status.healthy
        assert status.error == "no token"

    def test_missing_base_url(self) -> None:
        status = check_api_health(None, _token_manager())
        assert not status.healthy
        assert status.error == "Base URL not configured"

    @patch("analyze_articles.health.requests.Session")
    def test_closes_session_it_creates(self, mock_session_cls) -> None:
        own_session = mock_session_cls.return_value.__enter__.return_value
        own_session.get.return_value = Mock(status_code=200)

        status = check_api_health("https://core.example", _token_manager())

        assert status.healthy
        own_session.get.assert_called_once()
        mock_session_cls.return_value.__exit__.assert_called_once()
