# inventory/routers/meta.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["meta"])


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "pong"
