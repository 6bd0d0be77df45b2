"""
Liveness routes (unauthenticated, no side effects).
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/")
async def root() -> Dict[str, Any]:
    return {
        "message": "Phonebook API is running!",
        "version": API_VERSION,
        "status": "OK",
    }


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "OK", "database": "connected"}
