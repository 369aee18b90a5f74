"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (users, projects, tasks,
tags, audit) under a unified prefix.  When a new domain is added,
include its router here.
"""

from fastapi import APIRouter

from .endpoints import audit, projects, tags, tasks, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
