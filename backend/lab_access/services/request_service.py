from dataclasses import dataclass
from typing import List, Optional
import logging

from lab_access.core.exceptions import AuthorizationError
from lab_access.core.gateway import DataGateway
from lab_access.models.access_request import AccessRequest, RequestStatus
from lab_access.models.profile import Profile, UserRole
from lab_access.schemas.access_request import AccessRequestForm
from lab_access.services import validation

logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = "Your access request has been submitted successfully"


@dataclass
class SubmissionResult:
    message: str
    form: AccessRequestForm
    requests: List[AccessRequest]


class RequestService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def build_record(self, profile: Profile, validated: validation.ValidatedRequest) -> AccessRequest:
        record = AccessRequest(
            user_id=profile.user_id,
            purpose=validated.purpose,
            request_date=validated.request_date,
            in_time=validated.in_time,
            out_time=validated.out_time,
            status=RequestStatus.PENDING,
            is_for_students=validated.is_for_students,
        )
        if validated.is_for_students:
            record.num_systems = validated.num_systems
            record.num_students = validated.num_students
        return record

    async def submit(self, profile: Profile, form: AccessRequestForm) -> SubmissionResult:
        """
        Validate, insert once, then re-read the caller's list so the result
        carries server-assigned fields (id, status, timestamps).
        """
        if profile.role not in (UserRole.STUDENT, UserRole.FACULTY):
            raise AuthorizationError("Only students and faculty can submit access requests")

        validated = validation.validate_access_request(form.model_dump(), profile.role, form.request_type)
        record = self.build_record(profile, validated)
        created = await self.gateway.create_access_request(record)
        logger.info(
            "[REQUESTS] %s submitted request %s for %s (for_students=%s)",
            profile.login_id, created.id, validated.request_date.isoformat(), validated.is_for_students,
        )

        requests = await self.list_requests()
        return SubmissionResult(message=SUBMITTED_MESSAGE, form=AccessRequestForm(), requests=requests)

    async def list_requests(self, owner_filter: Optional[str] = None) -> List[AccessRequest]:
        return await self.gateway.list_access_requests(owner_filter)
