"""Register user use case."""

import logging
import re
from datetime import UTC, datetime
from uuid import uuid4

from tenantgate.application.dto.validation import check_optional_text, clean_text
from tenantgate.domain.entities import User
from tenantgate.domain.exceptions import Conflict, NotFound, ValidationError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str) -> str:
    """Strip and check email shape."""
    if not isinstance(email, str):
        raise ValidationError("Email must be a valid address")
    email = email.strip()
    if not EMAIL_RE.match(email):
        raise ValidationError("Email must be a valid address")
    return email


class RegisterUserUseCase:
    """Self-service sign-up: the caller picks a plan, never a role.

    Every new user gets default_role_id; global roles change only through
    AssignUserRoleUseCase.
    """

    def __init__(self, unit_of_work_factory: type, default_role_id: str) -> None:
        self._uow_factory = unit_of_work_factory
        self._default_role_id = default_role_id

    async def execute(
        self,
        full_name: str,
        email: str,
        plan_id: str,
        credential_ref: str | None = None,
    ) -> User:
        """Register user. Emails are unique regardless of case."""
        full_name = clean_text(full_name, "full_name")
        if not 2 <= len(full_name) <= 100:
            raise ValidationError("Full name must have between 2 and 100 characters")
        email = validate_email(email)
        check_optional_text(credential_ref, "credential_ref")

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise Conflict("A user with this email already exists")
            if not await uow.roles.get_by_id(self._default_role_id):
                raise NotFound("Role", self._default_role_id)
            if not await uow.plans.get_by_id(plan_id):
                raise NotFound("Plan", plan_id)

            now = datetime.now(UTC)
            user = User(
                id=str(uuid4()),
                full_name=full_name,
                email=email,
                role_id=self._default_role_id,
                plan_id=plan_id,
                created_at=now,
                updated_at=now,
                credential_ref=credential_ref,
            )
            await uow.users.create(user)

        logger.info("User %s registered on plan %s", user.id, plan_id)
        return user
