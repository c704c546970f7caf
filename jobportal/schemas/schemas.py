"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names follow the JSON the frontend already speaks (clientId,
emailOTP, jobTitle, ...); Python code uses the snake_case field names.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from enum import Enum


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class DeliveryStatus(str, Enum):
    sent = "sent"
    failed = "failed"


class DeliveryCategory(str, Enum):
    verification = "verification"
    login = "login"
    job_invitation = "job_invitation"


class DeliveryChannel(str, Enum):
    email = "email"
    sms = "sms"


class ExperienceLevel(str, Enum):
    entry = "entry"
    intermediate = "intermediate"
    senior = "senior"


class CandidateStatus(str, Enum):
    pending = "pending"


class PostingStatus(str, Enum):
    active = "active"


# ============================================================
# REGISTRATION / VERIFICATION SCHEMAS
# ============================================================

class RegisterRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone_no: str = Field(..., min_length=5, max_length=20)
    company_name: str = Field(..., min_length=1, max_length=200)
    company_email: EmailStr
    employee_size: int = Field(..., ge=1)

    @field_validator("name", "phone_no", "company_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class RegisterResponse(ApiModel):
    success: bool = True
    message: str
    client_id: str = Field(..., alias="clientId")


class VerifyOtpRequest(ApiModel):
    client_id: str = Field(..., alias="clientId")
    email_otp: str = Field(..., alias="emailOTP")
    mobile_otp: str = Field(..., alias="mobileOTP")


class VerifyOtpResponse(ApiModel):
    success: bool = True
    message: str
    verified: bool = True
    redirect_url: str = Field("/dashboard", alias="redirectUrl")


class SendOtpResponse(ApiModel):
    success: bool = True
    message: str
    client_id: str = Field(..., alias="clientId")
    delivery: Dict[str, DeliveryStatus] = {}


class VerificationStatusResponse(ApiModel):
    success: bool = True
    verified: bool
    message: str


# ============================================================
# LOGIN SCHEMAS
# ============================================================

class LoginRequest(ApiModel):
    company_email: Optional[EmailStr] = None
    phone_no: Optional[str] = None

    @field_validator("phone_no")
    @classmethod
    def strip_phone(cls, v: Optional[str]) -> Optional[str]:
        # Same normalisation as registration; blank means not given
        if v is None:
            return None
        return v.strip() or None


class LoginResponse(ApiModel):
    success: bool = True
    message: str
    client_id: str = Field(..., alias="clientId")
    delivery: Dict[str, DeliveryStatus] = {}


class VerifyLoginRequest(ApiModel):
    client_id: str = Field(..., alias="clientId")
    login_otp: str = Field(..., alias="loginOTP")


class SessionUser(ApiModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class TokenResponse(ApiModel):
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: SessionUser


# ============================================================
# JOB POSTING SCHEMAS
# ============================================================

class JobPostingCreate(ApiModel):
    job_title: str = Field(..., alias="jobTitle", min_length=1, max_length=200)
    job_description: str = Field("", alias="jobDescription")
    experience_level: ExperienceLevel = Field(..., alias="experienceLevel")
    candidates: List[EmailStr] = []
    end_date: date = Field(..., alias="endDate")


class CandidateResponse(ApiModel):
    email: str
    status: str = CandidateStatus.pending.value
    added_at: datetime = Field(..., alias="addedAt")


class JobPostingResponse(ApiModel):
    id: str = Field(..., alias="_id")
    client_id: str = Field(..., alias="clientId")
    job_title: str = Field(..., alias="jobTitle")
    job_description: str = Field("", alias="jobDescription")
    experience_level: str = Field(..., alias="experienceLevel")
    candidates: List[CandidateResponse] = []
    end_date: datetime = Field(..., alias="endDate")
    status: str = PostingStatus.active.value
    created_at: datetime = Field(..., alias="createdAt")


class JobPostingCreateResponse(ApiModel):
    success: bool = True
    message: str
    job_posting: JobPostingResponse = Field(..., alias="jobPosting")


class JobPostingListResponse(ApiModel):
    success: bool = True
    job_postings: List[JobPostingResponse] = Field([], alias="jobPostings")


# ============================================================
# DELIVERY LOG SCHEMAS
# ============================================================

class EmailLogResponse(ApiModel):
    id: str = Field(..., alias="_id")
    recipient: str
    subject: Optional[str] = None
    body: str
    status: DeliveryStatus
    error: Optional[str] = None
    sent_at: datetime = Field(..., alias="sentAt")
    client_id: Optional[str] = Field(None, alias="clientId")
    type: DeliveryCategory
    channel: DeliveryChannel = DeliveryChannel.email


class EmailLogListResponse(ApiModel):
    success: bool = True
    logs: List[EmailLogResponse] = []
