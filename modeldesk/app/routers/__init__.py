# -*- coding: utf-8 -*-
from fastapi import APIRouter

from .general import router as general_router
from .models import router as models_router

router = APIRouter()

router.include_router(models_router)
router.include_router(general_router)

__all__ = ["router"]
