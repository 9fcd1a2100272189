"""Onboarding wizard that accumulates preferences before one save."""

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from pantrypal.domain.groups import GroupEnrollment
from pantrypal.domain.preferences import (
    MIN_AGE,
    GroupType,
    PreferencesRecord,
    UserPreferences,
)
from pantrypal.domain.results import ApiResult
from pantrypal.services.auth import SessionProvider
from pantrypal.services.groups import GroupService
from pantrypal.services.preferences import PreferencesService

_logger = logging.getLogger(__name__)


class OnboardingStep(IntEnum):
    """Wizard steps in the order they are shown."""

    GROUP_TYPE = 0
    LOCATION = 1
    NAME = 2
    FAMILY_SIZE = 3
    AGE = 4
    ALLERGIES = 5
    FOODS_TO_AVOID = 6
    REVIEW = 7
    SUCCESS = 8


@dataclass
class OnboardingWizard:
    """Linear nine-step flow over a shared preferences draft.

    Only the group step and the final completion touch the backend; every
    other step edits ``draft`` in memory.
    """

    session_provider: SessionProvider
    group_service: GroupService
    preferences_service: PreferencesService
    draft: UserPreferences = field(default_factory=UserPreferences)
    step: OnboardingStep = OnboardingStep.GROUP_TYPE
    error: str = ""
    is_submitting: bool = False
    exited: bool = False
    finished: bool = False

    def can_proceed(self) -> bool:
        """Return True when the current step's input is complete."""
        draft = self.draft
        match self.step:
            case (
                OnboardingStep.GROUP_TYPE
                | OnboardingStep.REVIEW
                | OnboardingStep.SUCCESS
            ):
                # Left through create_group, join_group or complete().
                return False
            case OnboardingStep.LOCATION:
                return bool(draft.location)
            case OnboardingStep.NAME:
                return bool(draft.name.first.strip() and draft.name.last.strip())
            case OnboardingStep.FAMILY_SIZE:
                return draft.total_family_size > 0
            case OnboardingStep.AGE:
                return draft.age >= MIN_AGE
        return True

    def next(self) -> bool:
        """Advance one step if the current step is complete."""
        if not self.can_proceed():
            return False
        self.step = OnboardingStep(self.step + 1)
        return True

    def back(self) -> bool:
        """Go back one step; on the first step this leaves the flow."""
        if self.step == OnboardingStep.GROUP_TYPE:
            self.exited = True
            return False
        self.step = OnboardingStep(self.step - 1)
        return True

    def create_group(self, name: str) -> ApiResult[GroupEnrollment]:
        if not name:
            return self._fail("Please enter a group name")
        return self._enroll("create", name)

    def join_group(self, group_id: str) -> ApiResult[GroupEnrollment]:
        if not group_id:
            return self._fail("Please enter a group ID")
        return self._enroll("join", group_id)

    def complete(self) -> ApiResult[PreferencesRecord]:
        """Persist the draft and mark onboarding as completed."""
        if self.step != OnboardingStep.REVIEW:
            return ApiResult.failure(
                "bad-data", "Review your details before finishing onboarding"
            )
        user_id = self.session_provider.current_user_id()
        if not user_id:
            _logger.error("Cannot complete onboarding without a session")
            return ApiResult.failure("unauthorized", "No user ID found")

        record = self.draft.to_record(user_id, completed=True)
        result = self.preferences_service.save(record)
        if not result.ok:
            _logger.error("Failed to save preferences: %s", result.error)
            return result
        self.draft.complete_onboarding()
        self.step = OnboardingStep.SUCCESS
        self.finished = True
        return result

    def _enroll(self, group_type: GroupType, value: str) -> ApiResult[GroupEnrollment]:
        self.error = ""
        user_id = self.session_provider.current_user_id()
        if not user_id:
            return self._fail("Not authenticated")

        self.is_submitting = True
        try:
            if group_type == "create":
                result = self.group_service.create_group_with_membership(value, user_id)
            else:
                result = self.group_service.join_group_with_validation(value, user_id)
        finally:
            self.is_submitting = False

        if not result.ok or result.data is None:
            self.error = result.error or f"Failed to {group_type} group"
            return result

        self.draft.group_type = group_type
        self.draft.group_name = result.data.group.name
        self.step = OnboardingStep.LOCATION
        return result

    def _fail(self, message: str) -> ApiResult[GroupEnrollment]:
        self.error = message
        return ApiResult.failure("bad-data", message)
