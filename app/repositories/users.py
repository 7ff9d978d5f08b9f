# app/repositories/users.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from app.models.all_models import Collection, UserRole
from app.repositories.base import BaseRepository, dump_for_create, first_present
from app.schemas.user import Staff, UserCreate

logger = logging.getLogger(__name__)

STAFF_DEFAULTS = {
    "name": "Unknown Staff",
    "department": "General",
    "branch": "Main",
    "role": UserRole.STAFF.value,
    "permissions": [],
}


class UserRepository(BaseRepository[Staff]):
    collection = Collection.USERS.value
    model = Staff
    defaults = STAFF_DEFAULTS

    def normalize(self, record: Mapping[str, Any]) -> Staff:
        data: Dict[str, Any] = dict(record)
        data["phone"] = first_present(record, "phone", "mobile")
        return super().normalize(data)

    def get_staff_details(self, staff_id: str) -> Staff:
        """Unlike other lookups, a missing staff member raises ``NotFound``."""
        return self.normalize(self.store.get_by_id(self.collection, staff_id))

    def list_staff(self, branch: Optional[str] = None) -> List[Staff]:
        filters = {"role": UserRole.STAFF.value}
        if branch:
            filters["branch"] = branch
        return sorted(self.list(filters), key=lambda s: s.name)

    def email_taken(self, email: str) -> bool:
        return bool(self.store.list_where(self.collection, {"email": email.lower()}))

    def mobile_taken(self, mobile: str) -> bool:
        return bool(self.store.list_where(self.collection, {"mobile": mobile}))

    def register(self, payload: UserCreate) -> Staff:
        """Best-effort uniqueness: two concurrent registrations can both pass the checks."""
        fields = dump_for_create(payload)
        doc_id = fields.pop("id", None)
        fields["email"] = fields["email"].lower()
        user = self._create(fields, doc_id)
        logger.info(f"Registered {payload.role.value} user {user.id}")
        return user
