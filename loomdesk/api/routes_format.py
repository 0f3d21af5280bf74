# FILE: loomdesk/api/routes_format.py
from fastapi import APIRouter

from loomdesk.api.response import ok
from loomdesk.schemas.common import FormatCurrencyIn
from loomdesk.utils.formatting import format_currency

router = APIRouter()


@router.post("/currency")
def currency(payload: FormatCurrencyIn):
    return ok({"formatted": format_currency(payload.value, payload.symbol)})
