"""Aggregates all routers under a single prefix."""

from fastapi import APIRouter

from chatbot_platform.api.v1.routers import auth, chat, files, projects, prompts

router = APIRouter()
router.include_router(auth.router)
router.include_router(projects.router)
router.include_router(prompts.router)
router.include_router(chat.router)
router.include_router(files.router)
