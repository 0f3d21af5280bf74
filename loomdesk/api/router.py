# loomdesk/api/router.py
from fastapi import APIRouter
from loomdesk.api import (
    routes_challans,
    routes_parties,
    routes_format,
)

api_router = APIRouter()

api_router.include_router(routes_challans.router,
                          prefix="/challans",
                          tags=["challans"])
api_router.include_router(routes_parties.router,
                          prefix="/parties",
                          tags=["parties"])
api_router.include_router(routes_format.router,
                          prefix="/format",
                          tags=["format"])
