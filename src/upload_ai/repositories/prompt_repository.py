"""Repository for prompt template data access."""

from typing import List

from sqlmodel import Session as DBSession
from sqlmodel import select

from upload_ai.db_models import Prompt


class PromptRepository:
    """Read-only access to the seeded prompt templates."""

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def list_all(self) -> List[Prompt]:
        """Returns every stored template; an empty table yields an empty list."""
        return list(self._db.exec(select(Prompt).order_by(Prompt.title)).all())
