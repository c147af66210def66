from contextlib import contextmanager
from typing import Iterator
from uuid import uuid4

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from src.commonUtils.email_renderer import TemplateRenderer
from src.commonUtils.enumUtils import SubmissionPhase
from src.crud.waitlistService import SignupFormController
from src.schemas.waitlistSchema import SIGNUP_FIELDS, SignupRequest, SubmitRequested, WaitlistResponse

router = APIRouter()

SESSION_SUBMITTED_KEY = "waitlist_submitted"
SESSION_ID_KEY = "waitlist_session_id"


def get_renderer(request: Request) -> TemplateRenderer:
    return request.app.state.renderer


def get_signup_controller(request: Request) -> SignupFormController:
    """Fresh controller per request, wired to the notifier built at startup."""
    settings = request.app.state.settings
    return SignupFormController(
        notifier=request.app.state.notifier,
        service_id=settings.EMAILJS_SERVICE_ID,
        template_id=settings.EMAILJS_TEMPLATE_ID,
        recipient_name=settings.WAITLIST_RECIPIENT_NAME,
    )


def get_session_id(request: Request) -> str:
    return request.session.setdefault(SESSION_ID_KEY, uuid4().hex)


def already_submitted(request: Request) -> bool:
    return bool(request.session.get(SESSION_SUBMITTED_KEY))


@contextmanager
def submission_slot(request: Request) -> Iterator[bool]:
    """
    Yields True if this session may send now, False if another request from
    the same session is still waiting on the notifier.
    """
    session_id = get_session_id(request)
    in_flight = request.app.state.in_flight_sessions
    if session_id in in_flight:
        yield False
        return

    in_flight.add(session_id)
    try:
        yield True
    finally:
        in_flight.discard(session_id)


@router.get("/", response_class=HTMLResponse)
async def signup_page(request: Request,
                      controller: SignupFormController = Depends(get_signup_controller),
                      renderer: TemplateRenderer = Depends(get_renderer)):
    get_session_id(request)
    if already_submitted(request):
        return HTMLResponse(renderer.confirmation_page())
    return HTMLResponse(renderer.signup_form_page(controller))


@router.post("/waitlist", response_class=HTMLResponse)
async def submit_signup_form(request: Request,
                             controller: SignupFormController = Depends(get_signup_controller),
                             renderer: TemplateRenderer = Depends(get_renderer)):
    # Submitted is terminal for the browser session; never send twice
    if already_submitted(request):
        return HTMLResponse(renderer.confirmation_page())

    form = await request.form()
    for name in SIGNUP_FIELDS:
        value = form.get(name)
        controller.update_field(name, value if isinstance(value, str) else "")

    with submission_slot(request) as can_send:
        if can_send:
            await controller.submit()
        else:
            # Show the busy form without calling the notifier again
            controller.dispatch(SubmitRequested())

    if controller.phase == SubmissionPhase.SUBMITTED:
        request.session[SESSION_SUBMITTED_KEY] = True
        return HTMLResponse(renderer.confirmation_page())
    return HTMLResponse(renderer.signup_form_page(controller))


@router.post("/api/v1/waitlist", response_model=WaitlistResponse)
async def submit_signup(data: SignupRequest, request: Request,
                        controller: SignupFormController = Depends(get_signup_controller)):
    if already_submitted(request):
        return WaitlistResponse(status="submitted")

    for name, value in data.model_dump().items():
        controller.update_field(name, value)

    with submission_slot(request) as can_send:
        if not can_send:
            body = WaitlistResponse(status="submitting")
            return JSONResponse(status_code=409, content=body.model_dump())
        await controller.submit()

    if controller.phase == SubmissionPhase.SUBMITTED:
        request.session[SESSION_SUBMITTED_KEY] = True
        return WaitlistResponse(status="submitted")

    if controller.phase == SubmissionPhase.FAILED:
        body = WaitlistResponse(status="failed", message=controller.submit_error)
        return JSONResponse(status_code=502, content=body.model_dump())

    body = WaitlistResponse(status="invalid", errors=controller.errors)
    return JSONResponse(status_code=422, content=body.model_dump())
