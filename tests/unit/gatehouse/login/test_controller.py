"""Unit tests for gatehouse.login.controller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from gatehouse.login import AuthenticationError, FormInput, SubmissionController
from gatehouse.login.controller import DEFAULT_FAILURE_MESSAGE, extract_failure_message
from gatehouse.login.types import SubmissionOutcome, SubmissionStatus


def valid_input() -> FormInput:
    return FormInput(email="ada@example.com", password="analytical1")


class TestExtractFailureMessage:
    def test_reads_payload_message(self):
        error = AuthenticationError("rejected", status_code=401, payload={"message": "invalid credentials"})

        assert extract_failure_message(error) == "invalid credentials"

    def test_falls_back_without_payload(self):
        assert extract_failure_message(AuthenticationError("unreachable")) == DEFAULT_FAILURE_MESSAGE

    @pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}, {"message": 42}, {"error": "x"}])
    def test_falls_back_on_unusable_payload(self, payload):
        error = AuthenticationError("rejected", payload=payload)

        assert extract_failure_message(error, "fallback") == "fallback"

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"message": "invalid credentials"}, "invalid credentials"),
            ({"message": "   "}, None),
            ({"message": ""}, None),
            (None, None),
        ],
    )
    def test_agrees_with_display_message(self, payload, expected):
        error = AuthenticationError("rejected", payload=payload)

        assert error.display_message == expected
        assert extract_failure_message(error, "fallback") == (expected or "fallback")

    def test_reads_http_response_body(self):
        error = Exception("http error")
        error.response = MagicMock()
        error.response.json.return_value = {"message": "account locked"}

        assert extract_failure_message(error) == "account locked"

    def test_falls_back_when_response_body_is_not_json(self):
        error = Exception("http error")
        error.response = MagicMock()
        error.response.json.side_effect = ValueError("not json")

        assert extract_failure_message(error) == DEFAULT_FAILURE_MESSAGE

    def test_plain_exception_uses_fallback(self):
        assert extract_failure_message(RuntimeError("boom")) == DEFAULT_FAILURE_MESSAGE


class TestValidationPath:
    @pytest.mark.asyncio
    async def test_invalid_input_never_calls_authenticator(self):
        authenticator = AsyncMock()
        controller = SubmissionController(authenticator)

        outcome = await controller.submit(FormInput(email="nope", password="short"))

        assert outcome is SubmissionOutcome.INVALID
        authenticator.authenticate.assert_not_called()
        assert controller.state.status is SubmissionStatus.IDLE
        assert controller.validation.email_error == "invalid email format."
        assert controller.validation.password_error == "password must be at least 8 characters."

    def test_invalid_path_is_synchronous(self):
        authenticator = AsyncMock()
        controller = SubmissionController(authenticator)

        assert controller.begin(FormInput(email="", password="")) is SubmissionOutcome.INVALID
        assert controller.state.status is SubmissionStatus.IDLE
        authenticator.authenticate.assert_not_called()

    def test_field_error_does_not_touch_banner(self):
        controller = SubmissionController(AsyncMock())

        controller.begin(FormInput(email="nope", password="analytical1"))

        assert controller.banner == ""

    def test_submit_clears_previous_banner(self):
        controller = SubmissionController(AsyncMock())
        controller.show_banner("session expired, please log in again.")

        controller.begin(FormInput(email="nope", password="short"))

        assert controller.banner == ""

    def test_validation_recomputed_on_each_attempt(self):
        controller = SubmissionController(AsyncMock())
        controller.begin(FormInput(email="nope", password="analytical1"))
        assert controller.validation.email_error

        controller.begin(FormInput(email="ada@example.com", password="short"))

        assert controller.validation.email_error == ""
        assert controller.validation.password_error == "password must be at least 8 characters."

    def test_uses_custom_validator(self):
        validator = MagicMock()
        validator.return_value.is_valid = False
        validator.return_value.invalid_fields = ["email"]
        controller = SubmissionController(AsyncMock(), validator=validator)

        controller.begin(valid_input())

        validator.assert_called_once_with("ada@example.com", "analytical1")


class TestSubmission:
    @pytest.mark.asyncio
    async def test_valid_input_calls_authenticator_once_with_untouched_values(self, authenticator, settle):
        controller = SubmissionController(authenticator)
        form = FormInput(email="ada@example.com", password="  analytical1  ")

        task = asyncio.create_task(controller.submit(form))
        await settle()

        assert authenticator.calls == [("ada@example.com", "  analytical1  ")]
        authenticator.resolve()
        assert await task is SubmissionOutcome.AUTHENTICATED
        assert authenticator.calls == [("ada@example.com", "  analytical1  ")]

    @pytest.mark.asyncio
    async def test_locked_while_submitting(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()

        assert controller.state.status is SubmissionStatus.SUBMITTING
        assert controller.locked is True
        authenticator.resolve()
        await task

    @pytest.mark.asyncio
    async def test_success_keeps_form_locked_until_navigation(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()
        authenticator.resolve()
        await task

        assert controller.state.status is SubmissionStatus.SUCCEEDED
        assert controller.locked is True
        assert controller.banner == ""

    @pytest.mark.asyncio
    async def test_failure_with_message_sets_banner(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()
        authenticator.reject(AuthenticationError("rejected", status_code=401, payload={"message": "invalid credentials"}))

        assert await task is SubmissionOutcome.FAILED
        assert controller.banner == "invalid credentials"
        assert controller.state.status is SubmissionStatus.FAILED
        assert controller.state.message == "invalid credentials"
        assert controller.locked is False

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_fallback(self, authenticator, settle):
        controller = SubmissionController(authenticator, fallback_message="try later")

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()
        authenticator.reject(AuthenticationError("rejected", status_code=500))

        assert await task is SubmissionOutcome.FAILED
        assert controller.banner == "try later"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_logged_and_surfaced_with_fallback(self, caplog):
        authenticator = AsyncMock()
        authenticator.authenticate.side_effect = RuntimeError("boom")
        controller = SubmissionController(authenticator)

        outcome = await controller.submit(valid_input())

        assert outcome is SubmissionOutcome.FAILED
        assert controller.banner == DEFAULT_FAILURE_MESSAGE
        assert "Authenticator raised an unexpected RuntimeError." in caplog.text

    @pytest.mark.asyncio
    async def test_failed_state_cleared_by_next_attempt(self):
        authenticator = AsyncMock()
        authenticator.authenticate.side_effect = [AuthenticationError("rejected", payload={"message": "nope"}), None]
        controller = SubmissionController(authenticator)

        assert await controller.submit(valid_input()) is SubmissionOutcome.FAILED
        assert await controller.submit(FormInput(email="bad", password="analytical1")) is SubmissionOutcome.INVALID

        assert controller.banner == ""
        assert controller.state.status is SubmissionStatus.IDLE
        assert controller.state.message == ""

    @pytest.mark.asyncio
    async def test_resubmit_after_failure(self):
        authenticator = AsyncMock()
        authenticator.authenticate.side_effect = [AuthenticationError("rejected"), None]
        controller = SubmissionController(authenticator)

        assert await controller.submit(valid_input()) is SubmissionOutcome.FAILED
        assert await controller.submit(valid_input()) is SubmissionOutcome.AUTHENTICATED
        assert authenticator.authenticate.await_count == 2

    @pytest.mark.asyncio
    async def test_submit_while_submitting_is_ignored(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()

        assert await controller.submit(valid_input()) is SubmissionOutcome.IGNORED
        assert len(authenticator.calls) == 1
        authenticator.resolve()
        await task

    @pytest.mark.asyncio
    async def test_complete_without_begin_raises(self):
        controller = SubmissionController(AsyncMock())

        with pytest.raises(RuntimeError, match="No submission in progress"):
            await controller.complete()


class TestTeardown:
    @pytest.mark.asyncio
    async def test_late_success_after_dispose_is_discarded(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()
        controller.dispose()
        authenticator.resolve()

        assert await task is SubmissionOutcome.ABANDONED
        assert controller.state.status is SubmissionStatus.SUBMITTING

    @pytest.mark.asyncio
    async def test_late_failure_after_dispose_is_discarded(self, authenticator, settle):
        controller = SubmissionController(authenticator)

        task = asyncio.create_task(controller.submit(valid_input()))
        await settle()
        controller.dispose()
        authenticator.reject(AuthenticationError("rejected", payload={"message": "invalid credentials"}))

        assert await task is SubmissionOutcome.ABANDONED
        assert controller.banner == ""

    @pytest.mark.asyncio
    async def test_disposed_controller_does_not_submit(self):
        authenticator = AsyncMock()
        controller = SubmissionController(authenticator)
        controller.dispose()

        assert await controller.submit(valid_input()) is SubmissionOutcome.ABANDONED
        authenticator.authenticate.assert_not_called()
