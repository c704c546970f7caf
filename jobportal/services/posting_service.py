"""
Posting Service - create and list job postings.
"""

import logging
from datetime import datetime, time, timezone
from typing import List

from jobportal.core.errors import NotFound, NotVerified, ValidationFailed
from jobportal.schemas.schemas import CandidateStatus, JobPostingCreate, PostingStatus
from jobportal.services.otp_service import OtpIssuer
from jobportal.services.stores import ClientStore, PostingStore

logger = logging.getLogger(__name__)


class PostingService:
    """
    Args:
        postings: posting store
        clients: used to check the owner is verified
        issuer: sends the candidate invitations
        tenant_scoped: list only the caller's own postings
    """

    def __init__(self, postings: PostingStore, clients: ClientStore, issuer: OtpIssuer, tenant_scoped: bool = True):
        self.postings = postings
        self.clients = clients
        self.issuer = issuer
        self.tenant_scoped = tenant_scoped

    def create(self, owner: dict, data: JobPostingCreate) -> dict:
        """
        Store a posting for the authenticated client and invite each
        candidate. Invitation failures are logged per candidate and do not
        fail the request.
        """
        client_id = owner["id"]
        client = self.clients.get(client_id)
        if client is None:
            raise NotFound()
        if not client.get("verified"):
            raise NotVerified("Please verify your account before creating a job posting.")

        now = datetime.now(timezone.utc)
        if data.end_date <= now.date():
            raise ValidationFailed("End date must be after today.")

        # Same address twice is one invitation
        emails = list(dict.fromkeys(str(email) for email in data.candidates))

        posting = self.postings.insert({
            "clientId": client_id,
            "jobTitle": data.job_title,
            "jobDescription": data.job_description,
            "experienceLevel": data.experience_level.value,
            "candidates": [
                {"email": email, "status": CandidateStatus.pending.value, "addedAt": now}
                for email in emails
            ],
            "endDate": datetime.combine(data.end_date, time.min, tzinfo=timezone.utc),
            "status": PostingStatus.active.value,
            "createdAt": now,
        })
        logger.info("Client %s created posting %s with %d candidates", client_id, posting["_id"], len(emails))

        for email in emails:
            self.issuer.send_invitation(email, data.job_title, client_id)

        return posting

    def list(self, owner: dict) -> List[dict]:
        client_id = owner["id"] if self.tenant_scoped else None
        postings = self.postings.list(client_id)
        logger.debug("Found %d job postings", len(postings))
        return postings
