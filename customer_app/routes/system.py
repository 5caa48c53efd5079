"""Health check and diagnostic routes."""
from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

router = APIRouter()

TEST_HOME_HTML = """<!doctype html>
<html><head><meta charset="utf-8"><title>TEST</title></head>
<body>
  <h1>TEST HOME</h1>
  <p>If you see this, the server is sending HTML just fine.</p>
</body></html>"""


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"


@router.get("/test-home", response_class=HTMLResponse)
async def test_home():
    return TEST_HOME_HTML
