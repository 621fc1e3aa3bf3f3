"""Prompt template endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException

from upload_ai.dependencies import get_prompt_repository
from upload_ai.logging import setup_logging
from upload_ai.repositories import PromptRepository
from upload_ai.response_models import PromptResponse

logger = setup_logging()

router = APIRouter(prefix="/prompts", tags=["prompts"])

RepositoryDep = Annotated[PromptRepository, Depends(get_prompt_repository)]


@router.get("", response_model=List[PromptResponse])
def list_prompts(repo: RepositoryDep):
    """Returns every prompt template; an empty list when none were seeded."""
    try:
        return [
            PromptResponse(id=p.id, title=p.title, template=p.template)
            for p in repo.list_all()
        ]
    except Exception as e:
        logger.error(f"Error listing prompts: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
