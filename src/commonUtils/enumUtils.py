from enum import Enum


class OtpSolution(str, Enum):
    GOOGLE_AUTHENTICATOR = "Google Authenticator"
    AUTHY = "Authy"
    MICROSOFT_AUTHENTICATOR = "Microsoft Authenticator"
    SMS_OTP = "SMS-based OTP"
    EMAIL_OTP = "Email-based OTP"
    OTHER = "Other"


class SubmissionPhase(str, Enum):
    """
    Lifecycle of a single signup form session.

    Flow:
    1. IDLE → form is editable, nothing sent yet
    2. SUBMITTING → one notification call in flight, submit disabled
    3. SUBMITTED → notification delivered, form replaced by thank-you view (terminal)
    4. FAILED → notification rejected, form editable again with an error message
    """
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


class NotifierBackend(str, Enum):
    EMAILJS = "emailjs"
    SMTP = "smtp"
