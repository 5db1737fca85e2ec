"""
Tests for the popup completion state machine and page.
"""

import pytest
from fastapi.testclient import TestClient

from app.services.auth_completion import (
    CLOSE_DELAY_MS,
    EXCHANGE_ENDPOINT,
    EXCHANGE_FAILED_MESSAGE,
    MISSING_CODE_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    AuthCompletion,
    CompletionStatus,
    InvalidTransition,
    render_auth_complete_page,
)


class TestAuthCompletion:
    """Tests for the transition rules."""

    def test_starts_pending(self):
        completion = AuthCompletion()

        assert completion.status is CompletionStatus.PENDING
        assert completion.is_terminal is False

    @pytest.mark.parametrize("code", [None, ""])
    def test_missing_code_goes_to_error(self, code):
        completion = AuthCompletion()

        assert completion.start(code) is False
        assert completion.status is CompletionStatus.ERROR
        assert completion.error == MISSING_CODE_MESSAGE

    def test_success_schedules_close(self):
        completion = AuthCompletion()

        assert completion.start("4/0Ab") is True
        completion.finish(ok=True, payload={"success": True})

        assert completion.status is CompletionStatus.SUCCESS
        assert completion.close_after_ms == 1500
        assert completion.error is None

    def test_error_message_shown_verbatim(self):
        completion = AuthCompletion()
        completion.start("4/0Ab")

        completion.finish(ok=False, payload={"error": "Failed to exchange authorization code for token."})

        assert completion.status is CompletionStatus.ERROR
        assert completion.error == "Failed to exchange authorization code for token."
        assert completion.close_after_ms is None

    def test_error_without_message_uses_fallback(self):
        completion = AuthCompletion()
        completion.start("code")

        completion.finish(ok=False, payload=None)

        assert completion.error == EXCHANGE_FAILED_MESSAGE

    def test_network_failure(self):
        completion = AuthCompletion()
        completion.start("code")

        completion.fail(None)

        assert completion.error == UNKNOWN_ERROR_MESSAGE

    def test_terminal_states_do_not_change(self):
        completion = AuthCompletion()
        completion.start("code")
        completion.finish(ok=True)

        with pytest.raises(InvalidTransition):
            completion.fail("late error")
        with pytest.raises(InvalidTransition):
            completion.finish(ok=False)

        assert completion.status is CompletionStatus.SUCCESS


class TestCompletionPage:
    """Tests for the rendered page."""

    def test_page_carries_endpoint_delay_and_messages(self):
        page = render_auth_complete_page()

        assert EXCHANGE_ENDPOINT in page
        assert f'"closeDelayMs": {CLOSE_DELAY_MS}' in page
        assert MISSING_CODE_MESSAGE in page
        assert "window.close()" in page
        assert "</script>" in page

    def test_served_at_gsc_auth_complete(self, client: TestClient):
        response = client.get("/gsc-auth-complete?code=4/0Ab")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert EXCHANGE_ENDPOINT in response.text
