"""
Account Service.

Login, password changes and role lookup. Credentials are compared as
stored; there is no hashing layer.
"""

import logging
import re
from typing import Optional

from ..config import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, NRIC_PATTERN
from ..errors import NotFoundError, ValidationError
from ..models import Person, Result
from ..store import HousingStore, LockManager, person_key

logger = logging.getLogger(__name__)

_NRIC_RE = re.compile(NRIC_PATTERN)

ROLE_APPLICANT = "applicant"
ROLE_OFFICER = "officer"
ROLE_MANAGER = "manager"


class AccountService:

    def __init__(self, store: HousingStore, locks: Optional[LockManager] = None):
        self.store = store
        self.locks = locks or LockManager()

    def authenticate(self, nric: str, password: str) -> Result:
        """
        Log a person in by NRIC.

        Fails with:
            ValidationError: malformed NRIC or wrong password
            NotFoundError: no such user
        """
        nric = (nric or "").strip().upper()
        if not _NRIC_RE.match(nric):
            return self._reject(ValidationError(f"'{nric}' is not a valid NRIC"))

        person = self.store.people.find_by_key(nric)
        if person is None:
            return self._reject(NotFoundError(f"No user with NRIC {nric}"))
        if not person.authenticate(password):
            return self._reject(ValidationError("Incorrect password"))

        logger.info("%s logged in", nric)
        return Result.success(person)

    def change_password(self, person: Person, old_password: str, new_password: str) -> Result:
        if not person.authenticate(old_password):
            return self._reject(ValidationError("Current password is incorrect"))
        if not new_password or not MIN_PASSWORD_LENGTH <= len(new_password) <= MAX_PASSWORD_LENGTH:
            return self._reject(ValidationError(
                f"Password must be {MIN_PASSWORD_LENGTH}-{MAX_PASSWORD_LENGTH} characters"
            ))
        if new_password == old_password:
            return self._reject(ValidationError("New password must differ from the current one"))

        with self.locks.hold(person_key(person.nric)):
            person.password = new_password
        logger.info("Password changed for %s", person.nric)
        return Result.success(person)

    def roles_of(self, nric: str) -> set:
        roles = set()
        if self.store.is_applicant(nric):
            roles.add(ROLE_APPLICANT)
        if self.store.is_officer(nric):
            roles.add(ROLE_OFFICER)
        if self.store.is_manager(nric):
            roles.add(ROLE_MANAGER)
        return roles

    @staticmethod
    def _reject(error) -> Result:
        logger.info("Rejected: %s", error)
        return Result.failure(error)
