from typing import Any, Dict, Optional

import logging

from src.commonUtils.enumUtils import SubmissionPhase
from src.commonUtils.notifier import Notifier
from src.commonUtils.signupValidation import validate_signup
from src.crud.signupStateMachine import SignupEvent, transition
from src.schemas.waitlistSchema import (
    FieldUpdated,
    FormState,
    SignupRequest,
    SubmissionFailed,
    SubmissionSucceeded,
    SubmitRequested,
    ValidationErrors,
)

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"
DEFAULT_RECIPIENT_NAME = "MOJA Waitlist Admin"


def or_not_provided(value: str) -> str:
    return value or NOT_PROVIDED


def compose_summary_message(request: SignupRequest) -> str:
    return "\n".join([
        "New waitlist signup:",
        f"Full Name: {request.full_name}",
        f"Email: {request.email}",
        f"Company: {or_not_provided(request.company_name)}",
        f"Current OTP Solution: {or_not_provided(request.current_otp)}",
        f"Expected Monthly Usage: {or_not_provided(request.monthly_usage)}",
    ])


def build_template_params(request: SignupRequest,
                          recipient_name: str = DEFAULT_RECIPIENT_NAME) -> Dict[str, Any]:
    """Named template variables sent with every notification."""
    return {
        "to_name": recipient_name,
        "from_name": request.full_name,
        "from_email": request.email,
        "company_name": or_not_provided(request.company_name),
        "current_otp": or_not_provided(request.current_otp),
        "monthly_usage": or_not_provided(request.monthly_usage),
        "message": compose_summary_message(request),
    }


class SignupFormController:
    """
    Owns one signup form session: field state, validation errors and the
    submission lifecycle. All state changes go through `transition`.
    """

    def __init__(self, notifier: Notifier, service_id: str = "", template_id: str = "",
                 recipient_name: str = DEFAULT_RECIPIENT_NAME,
                 state: Optional[FormState] = None):
        self.notifier = notifier
        self.service_id = service_id
        self.template_id = template_id
        self.recipient_name = recipient_name
        self.state = state or FormState()

    def dispatch(self, event: SignupEvent) -> FormState:
        self.state = transition(self.state, event)
        return self.state

    def update_field(self, name: str, value: Optional[str]):
        self.dispatch(FieldUpdated(name=name, value=value or ""))

    def validate(self) -> ValidationErrors:
        return validate_signup(self.state.request)

    async def submit(self):
        if self.state.phase in (SubmissionPhase.SUBMITTING, SubmissionPhase.SUBMITTED):
            return

        if self.dispatch(SubmitRequested()).phase != SubmissionPhase.SUBMITTING:
            return

        request = self.state.request
        try:
            await self.notifier.send(
                self.service_id,
                self.template_id,
                build_template_params(request, self.recipient_name),
            )
        except Exception as e:
            logger.error(f"Submission error: {str(e)}", exc_info=True)
            self.dispatch(SubmissionFailed(error=str(e)))
            return

        logger.info("New waitlist signup delivered")
        self.dispatch(SubmissionSucceeded())

    @property
    def phase(self) -> SubmissionPhase:
        return self.state.phase

    @property
    def errors(self) -> ValidationErrors:
        return self.state.errors

    @property
    def submit_error(self) -> Optional[str]:
        return self.state.submit_error

    @property
    def is_busy(self) -> bool:
        return self.state.phase == SubmissionPhase.SUBMITTING

    @property
    def submit_disabled(self) -> bool:
        return self.is_busy

    @property
    def submit_label(self) -> str:
        return "Submitting..." if self.is_busy else "Join Waitlist"

    @property
    def view(self) -> str:
        return "confirmation" if self.state.phase == SubmissionPhase.SUBMITTED else "form"
