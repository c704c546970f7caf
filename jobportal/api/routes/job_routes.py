"""
Job Routes

POST /job-postings - Create job posting and invite candidates
GET /job-postings - List job postings, newest first
"""

from fastapi import APIRouter, Depends

from jobportal.api.deps import get_posting_service
from jobportal.core.auth import get_current_client
from jobportal.services.posting_service import PostingService
from jobportal.schemas.schemas import (
    JobPostingCreate, JobPostingCreateResponse, JobPostingListResponse, JobPostingResponse
)

router = APIRouter(prefix="/job-postings", tags=["Jobs"])


@router.post("", response_model=JobPostingCreateResponse, status_code=201)
def create_job_posting(
    posting: JobPostingCreate,
    client: dict = Depends(get_current_client),
    service: PostingService = Depends(get_posting_service)
):
    """Create a new job posting. Only verified clients can post."""
    created = service.create(client, posting)
    return JobPostingCreateResponse(
        message="Job posting created successfully",
        job_posting=JobPostingResponse.model_validate(created),
    )


@router.get("", response_model=JobPostingListResponse)
def list_job_postings(
    client: dict = Depends(get_current_client),
    service: PostingService = Depends(get_posting_service)
):
    postings = service.list(client)
    return JobPostingListResponse(
        job_postings=[JobPostingResponse.model_validate(p) for p in postings]
    )
