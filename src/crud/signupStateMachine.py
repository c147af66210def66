from typing import Union

from src.commonUtils.enumUtils import SubmissionPhase
from src.commonUtils.signupValidation import validate_signup
from src.schemas.waitlistSchema import (
    SIGNUP_FIELDS,
    FieldUpdated,
    FormState,
    SubmissionFailed,
    SubmissionSucceeded,
    SubmitRequested,
)

SUBMIT_ERROR_MESSAGE = "Something went wrong. Please try again later."

SignupEvent = Union[FieldUpdated, SubmitRequested, SubmissionSucceeded, SubmissionFailed]


def transition(state: FormState, event: SignupEvent) -> FormState:
    """
    Pure state transition for a signup form session.

    Idle/Failed --submit(valid)--> Submitting
    Idle/Failed --submit(invalid)--> Idle (errors updated, failure message cleared)
    Submitting --succeeded--> Submitted (terminal)
    Submitting --failed--> Failed
    Anything not listed leaves the state unchanged.
    """
    if state.phase == SubmissionPhase.SUBMITTED:
        return state

    if isinstance(event, FieldUpdated):
        if event.name not in SIGNUP_FIELDS:
            raise ValueError(f"Unknown signup field: {event.name}")
        request = state.request.model_copy(update={event.name: event.value})
        return state.model_copy(update={"request": request})

    if isinstance(event, SubmitRequested):
        if state.phase == SubmissionPhase.SUBMITTING:
            return state
        errors = validate_signup(state.request)
        if errors:
            return state.model_copy(update={
                "errors": errors,
                "phase": SubmissionPhase.IDLE,
                "submit_error": None,
            })
        return state.model_copy(update={
            "errors": {},
            "phase": SubmissionPhase.SUBMITTING,
            "submit_error": None,
        })

    if isinstance(event, SubmissionSucceeded):
        if state.phase != SubmissionPhase.SUBMITTING:
            return state
        return state.model_copy(update={"phase": SubmissionPhase.SUBMITTED})

    if isinstance(event, SubmissionFailed):
        if state.phase != SubmissionPhase.SUBMITTING:
            return state
        return state.model_copy(update={
            "phase": SubmissionPhase.FAILED,
            "submit_error": SUBMIT_ERROR_MESSAGE,
        })

    raise TypeError(f"Unsupported signup event: {type(event).__name__}")
