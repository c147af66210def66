"""Tests for the signup form controller and the notification envelope."""

import asyncio
import logging

import pytest

from src.commonUtils.enumUtils import SubmissionPhase
from src.crud.signupStateMachine import SUBMIT_ERROR_MESSAGE
from src.crud.waitlistService import (
    NOT_PROVIDED,
    SignupFormController,
    build_template_params,
    compose_summary_message,
)
from src.schemas.waitlistSchema import SignupRequest
from tests.fakes import VALID_SIGNUP


def make_controller(notifier, **fields) -> SignupFormController:
    controller = SignupFormController(notifier, service_id="service_test", template_id="template_test")
    for name, value in {**VALID_SIGNUP, **fields}.items():
        controller.update_field(name, value)
    return controller


class TestTemplateParams:

    def test_empty_optional_fields_become_not_provided(self):
        params = build_template_params(SignupRequest(full_name="Jane Doe", email="jane@x.com"))
        assert params["to_name"] == "MOJA Waitlist Admin"
        assert params["from_name"] == "Jane Doe"
        assert params["from_email"] == "jane@x.com"
        assert params["company_name"] == NOT_PROVIDED
        assert params["current_otp"] == NOT_PROVIDED
        assert params["monthly_usage"] == NOT_PROVIDED

    def test_provided_optional_fields_pass_through(self):
        request = SignupRequest(
            full_name="Jane Doe",
            email="jane@x.com",
            company_name="Acme",
            current_otp="Authy",
            monthly_usage="10,000 authentications",
        )
        params = build_template_params(request, recipient_name="Ops")
        assert params["to_name"] == "Ops"
        assert params["company_name"] == "Acme"
        assert params["current_otp"] == "Authy"
        assert params["monthly_usage"] == "10,000 authentications"

    def test_whitespace_optional_field_is_sent_as_given(self):
        params = build_template_params(SignupRequest(full_name="Jane", email="a@b.c", company_name=" "))
        assert params["company_name"] == " "

    def test_summary_message_lists_every_field(self):
        request = SignupRequest(full_name="Jane Doe", email="jane@x.com", current_otp="SMS-based OTP")
        assert compose_summary_message(request) == (
            "New waitlist signup:\n"
            "Full Name: Jane Doe\n"
            "Email: jane@x.com\n"
            "Company: Not provided\n"
            "Current OTP Solution: SMS-based OTP\n"
            "Expected Monthly Usage: Not provided"
        )


class TestControllerSubmit:

    @pytest.mark.asyncio
    async def test_valid_submit_sends_once_and_completes(self, notifier):
        controller = make_controller(notifier)

        await controller.submit()

        assert controller.phase == SubmissionPhase.SUBMITTED
        assert controller.view == "confirmation"
        assert len(notifier.calls) == 1
        service_id, template_id, params = notifier.calls[0]
        assert (service_id, template_id) == ("service_test", "template_test")
        assert params["company_name"] == NOT_PROVIDED
        assert params["current_otp"] == NOT_PROVIDED
        assert params["monthly_usage"] == NOT_PROVIDED

    @pytest.mark.asyncio
    async def test_submitted_is_terminal(self, notifier):
        controller = make_controller(notifier)
        await controller.submit()

        await controller.submit()
        controller.update_field("full_name", "Someone Else")

        assert controller.phase == SubmissionPhase.SUBMITTED
        assert controller.state.request.full_name == "Jane Doe"
        assert len(notifier.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fields", [{"full_name": "  "}, {"email": "not-an-email"}, {"email": ""}])
    async def test_invalid_submit_never_calls_out(self, notifier, fields):
        controller = make_controller(notifier, **fields)

        await controller.submit()

        assert notifier.calls == []
        assert controller.phase == SubmissionPhase.IDLE
        assert controller.errors
        assert controller.view == "form"

    @pytest.mark.asyncio
    async def test_failure_is_caught_and_logged(self, failing_notifier, caplog):
        controller = make_controller(failing_notifier)

        with caplog.at_level(logging.ERROR):
            await controller.submit()

        assert controller.phase == SubmissionPhase.FAILED
        assert controller.submit_error == SUBMIT_ERROR_MESSAGE
        assert controller.submit_disabled is False
        assert controller.submit_label == "Join Waitlist"
        assert "service ID is invalid" in caplog.text

    @pytest.mark.asyncio
    async def test_retry_after_failure_uses_same_fields(self, failing_notifier):
        controller = make_controller(failing_notifier, company_name="Acme")
        await controller.submit()

        failing_notifier.fail = False
        await controller.submit()

        assert controller.phase == SubmissionPhase.SUBMITTED
        assert len(failing_notifier.calls) == 2
        assert failing_notifier.calls[0][2] == failing_notifier.calls[1][2]

    @pytest.mark.asyncio
    async def test_second_submit_while_in_flight_is_ignored(self, notifier):
        controller = make_controller(notifier)
        release = notifier.hold()

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.phase == SubmissionPhase.SUBMITTING
        assert controller.submit_disabled is True
        assert controller.submit_label == "Submitting..."

        await controller.submit()
        release.set()
        await first

        assert len(notifier.calls) == 1
        assert controller.phase == SubmissionPhase.SUBMITTED

    @pytest.mark.asyncio
    async def test_success_log_leaves_out_email(self, notifier, caplog):
        controller = make_controller(notifier)

        with caplog.at_level(logging.DEBUG):
            await controller.submit()

        assert "New waitlist signup delivered" in caplog.text
        assert "jane@x.com" not in caplog.text


class TestControllerFields:

    def test_update_field_has_no_validation_side_effect(self, notifier):
        controller = SignupFormController(notifier)
        controller.update_field("email", "bad")
        assert controller.errors == {}

    def test_update_field_treats_none_as_empty(self, notifier):
        controller = SignupFormController(notifier)
        controller.update_field("company_name", None)
        assert controller.state.request.company_name == ""

    def test_validate_does_not_change_state(self, notifier):
        controller = SignupFormController(notifier)
        errors = controller.validate()
        assert set(errors) == {"full_name", "email"}
        assert controller.errors == {}
