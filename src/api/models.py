"""
API request, response and view models.

Pydantic models for request validation, OpenAPI schema generation and
rendering of the registration form.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.domain.ports import RegistrationOutcome, RegistrationSubmission

REQUIRED_MESSAGE = "This field is required."
BLANK_MESSAGE = "This field must not be empty."
INVALID_CHARACTERS_MESSAGE = "This field contains invalid characters."


class RegisterRequest(BaseModel):
    """
    Request model for registration.

    All three fields are required. A value consisting only of whitespace
    counts as missing; accepted values are kept exactly as submitted.
    Values must be encodable as UTF-8 (JSON allows lone surrogates).
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="FirstName", min_length=1, description="First name")
    last_name: str = Field(..., alias="LastName", min_length=1, description="Last name")
    email: str = Field(..., alias="Email", min_length=1, description="Email address")

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(BLANK_MESSAGE)
        return value

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def reject_unencodable(cls, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError(INVALID_CHARACTERS_MESSAGE) from None
        return value

    def to_submission(self) -> RegistrationSubmission:
        return RegistrationSubmission(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )


class RegisterResponse(BaseModel):
    """Response model for a handled registration."""

    show_success_message: bool
    show_error_message: bool
    registration_id: int | None = None


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str


class RegistrationForm(BaseModel):
    """
    View model for the registration form.

    Carries the submitted values back to the template together with the
    two mutually exclusive display flags and any field errors. A new
    instance is empty with both flags false.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="FirstName")
    last_name: str = Field("", alias="LastName")
    email: str = Field("", alias="Email")

    show_success_message: bool = False
    show_error_message: bool = False
    errors: dict[str, str] = Field(default_factory=dict)

    def with_outcome(self, outcome: RegistrationOutcome) -> "RegistrationForm":
        """Return a copy displaying the outcome of the registration service."""
        return self.model_copy(
            update={
                "show_success_message": outcome.show_success_message,
                "show_error_message": outcome.show_error_message,
            }
        )

    def with_errors(self, error: ValidationError) -> "RegistrationForm":
        """Return a copy listing one message per invalid field, keyed by form field name."""
        errors: dict[str, str] = {}
        for detail in error.errors():
            field_name = _field_alias(detail.get("loc", ()))
            errors.setdefault(field_name, _error_message(detail))
        return self.model_copy(update={"errors": errors})


def _field_alias(loc: tuple[Any, ...]) -> str:
    name = str(loc[0]) if loc else ""
    field_info = RegisterRequest.model_fields.get(name)
    if field_info is not None and field_info.alias:
        return field_info.alias
    return name


def _error_message(detail: dict[str, Any]) -> str:
    if detail.get("type") == "missing":
        return REQUIRED_MESSAGE
    error = detail.get("ctx", {}).get("error")
    if detail.get("type") == "value_error" and error is not None:
        return str(error)
    return BLANK_MESSAGE
