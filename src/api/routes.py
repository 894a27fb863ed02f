"""
Form routes - Registration form rendering and submission.

This module defines the HTML endpoints:
- GET / - Render the empty registration form
- POST / - Validate and handle a form-encoded submission

Validation failures are not HTTP errors: the form is re-rendered with
status 200 and nothing is stored.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from src.api.dependencies import get_registration_service
from src.api.models import RegisterRequest, RegistrationForm
from src.domain.registration import RegistrationService

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

router = APIRouter(tags=["form"])


def _render(request: Request, form: RegistrationForm) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"form": form})


@router.get("/", response_class=HTMLResponse, summary="Show the registration form")
def index(request: Request) -> HTMLResponse:
    """Render the empty registration form."""
    return _render(request, RegistrationForm())


@router.post("/", response_class=HTMLResponse, summary="Submit the registration form")
def submit(
    request: Request,
    first_name: str | None = Form(None, alias="FirstName"),
    last_name: str | None = Form(None, alias="LastName"),
    email: str | None = Form(None, alias="Email"),
    service: RegistrationService = Depends(get_registration_service),
) -> HTMLResponse:
    """
    Handle a registration form submission.

    Fields: **FirstName**, **LastName**, **Email** (all required).
    """
    fields = {"FirstName": first_name, "LastName": last_name, "Email": email}
    submitted = {name: value for name, value in fields.items() if value is not None}
    form = RegistrationForm.model_validate(submitted)

    try:
        register_request = RegisterRequest.model_validate(submitted)
    except ValidationError as e:
        return _render(request, form.with_errors(e))

    outcome = service.handle_registration(register_request.to_submission())
    return _render(request, form.with_outcome(outcome))
