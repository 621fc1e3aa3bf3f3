from .completions import router as completions_router
from .health import router as health_router
from .prompts import router as prompts_router
from .videos import router as videos_router

__all__ = ["completions_router", "health_router", "prompts_router", "videos_router"]
