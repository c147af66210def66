from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.commonUtils.enumUtils import SubmissionPhase

# Field name -> human readable message. Rebuilt from scratch on every validation pass.
ValidationErrors = Dict[str, str]


class SignupRequest(BaseModel):
    """The record being built by the user. Never persisted."""
    model_config = ConfigDict(frozen=True)

    full_name: str = Field("", description="User's full name (required)")
    email: str = Field("", description="Contact email (required)")
    company_name: str = Field("", description="Business or trading name")
    current_otp: str = Field("", description="Current OTP solution, one of OtpSolution or empty")
    monthly_usage: str = Field("", description="Expected monthly usage, free text")


SIGNUP_FIELDS = tuple(SignupRequest.model_fields.keys())


class FormState(BaseModel):
    model_config = ConfigDict(frozen=True)

    request: SignupRequest = Field(default_factory=SignupRequest)
    errors: ValidationErrors = Field(default_factory=dict)
    phase: SubmissionPhase = SubmissionPhase.IDLE
    submit_error: Optional[str] = None  # only set while FAILED


# Events fed to the state machine

class FieldUpdated(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class SubmitRequested(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubmissionSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubmissionFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str = ""


class WaitlistResponse(BaseModel):
    status: Literal["submitted", "submitting", "invalid", "failed"]
    errors: ValidationErrors = Field(default_factory=dict)
    message: Optional[str] = None
