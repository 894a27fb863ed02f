"""
API v1 routes.

Defines the JSON endpoint for the registration service.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": RegisterResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Registration storage unavailable"},
    },
    summary="Register a new person",
    description="Submit first name, last name and email. "
    "A duplicate email is reported through show_error_message and stores nothing.",
)
def register(
    request_data: RegisterRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a person unless the email is already registered.

    - **first_name**: First name
    - **last_name**: Last name
    - **email**: Email address (compared exactly as submitted)
    """
    outcome = service.handle_registration(request_data.to_submission())

    if outcome.show_error_message:
        response.status_code = status.HTTP_200_OK

    return RegisterResponse(
        show_success_message=outcome.show_success_message,
        show_error_message=outcome.show_error_message,
        registration_id=outcome.registration_id,
    )
