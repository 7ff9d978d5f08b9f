# app/repositories/branches.py
import logging
from typing import List, Optional

from app.models.all_models import Collection
from app.repositories.base import BaseRepository, dump_for_create, dump_for_update
from app.schemas.branch import Branch, BranchCreate, BranchUpdate

logger = logging.getLogger(__name__)


class BranchRepository(BaseRepository[Branch]):
    collection = Collection.BRANCHES.value
    model = Branch
    defaults = {"facilities": []}

    def list_all(self) -> List[Branch]:
        return sorted(self.list(), key=lambda b: b.name)

    def get_by_code(self, code: str) -> Optional[Branch]:
        matches = self.list({"code": code.upper()})
        return matches[0] if matches else None

    def create(self, payload: BranchCreate, doc_id: Optional[str] = None) -> Branch:
        fields = dump_for_create(payload)
        fields["code"] = fields["code"].upper()
        branch = self._create(fields, doc_id or fields["code"].lower())
        logger.info(f"Created branch {branch.id} ({branch.name})")
        return branch

    def update_branch(self, branch_id: str, payload: BranchUpdate) -> None:
        self.update(branch_id, dump_for_update(payload))
