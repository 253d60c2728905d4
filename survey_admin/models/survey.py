"""
Survey Models - Submitted survey records and the submission payload
Wire names follow the survey backend (camelCase, Mongo-style `_id`)
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, computed_field, field_validator, validator
import re


PHONE_PATTERN = re.compile(r"^(\+?\d{1,4}[-.\s]?)?(\(?\d{2,4}\)?[-.\s]?)?[\d\-.\s]{7,}$")
PINCODE_PATTERN = re.compile(r"^\d{5,10}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
GENDERS = ("male", "female")

REQUIRED_TEXT_MESSAGES = {
    "name": "Please enter your name",
    "nationality": "Please enter your nationality",
    "street_address": "Please enter your street address",
    "city": "Please enter your city",
    "state": "Please enter your state/province",
    "message": "Please enter your message",
}


class SurveyRecord(BaseModel):
    """
    Immutable snapshot of one survey submission.

    Produced by the backend listing and detail endpoints; the console
    never mutates a record once it has been received.
    """

    id: str = Field(..., alias="_id", description="Backend identity of the submission")
    name: str = Field(..., description="Respondent name")
    gender: str = Field(default="", description="Respondent gender")
    nationality: str = Field(default="", description="Respondent nationality")
    email: str = Field(..., description="Contact email")
    phone: str = Field(default="", description="Contact phone number")
    street_address: str = Field(default="", alias="streetAddress")
    city: str = Field(default="")
    state: str = Field(default="")
    pincode: str = Field(default="")
    message: str = Field(default="", description="Free-text message")
    created_at: datetime = Field(..., alias="createdAt", description="Submission timestamp")

    @computed_field
    @property
    def submitted_on(self) -> str:
        """Human readable submission date, e.g. 'May 01, 2025, 09:30 AM'."""
        return self.created_at.strftime("%b %d, %Y, %I:%M %p")

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "_id": "6650f1c2a4b5c6d7e8f90123",
                "name": "Asha Rao",
                "gender": "female",
                "nationality": "Indian",
                "email": "asha@example.com",
                "phone": "+91 98765 43210",
                "streetAddress": "12 MG Road",
                "city": "Bengaluru",
                "state": "Karnataka",
                "pincode": "560001",
                "message": "Great service.",
                "createdAt": "2025-05-01T09:30:00Z"
            }
        }


class SurveySubmission(BaseModel):
    """Payload sent to the backend when an end user submits the survey."""

    name: str = Field(..., min_length=1)
    gender: str
    nationality: str = Field(..., min_length=1)
    email: str
    phone: str
    street_address: str = Field(..., alias="streetAddress", min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: str
    message: str = Field(..., min_length=1)
    bot_field: Optional[str] = Field(default=None, alias="botField", description="Honeypot field")

    @field_validator("name", "nationality", "street_address", "city", "state", "message", mode="before")
    @classmethod
    def strip_required_text(cls, v, info: ValidationInfo):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(REQUIRED_TEXT_MESSAGES[info.field_name])
        return v.strip()

    @validator("gender")
    def validate_gender(cls, v):
        if v not in GENDERS:
            raise ValueError("Please select your gender")
        return v

    @validator("email")
    def validate_email(cls, v):
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email address")
        return v

    @validator("phone")
    def validate_phone(cls, v):
        if not PHONE_PATTERN.match(v):
            raise ValueError("Please enter a valid phone number (e.g., +1 (123) 456-7890)")
        return v

    @validator("pincode")
    def validate_pincode(cls, v):
        v = v.strip()
        if not PINCODE_PATTERN.match(v):
            raise ValueError("Please enter a valid pincode/zip code")
        return v

    def to_payload(self) -> dict:
        """Serialize using the backend's camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)

    class Config:
        populate_by_name = True
