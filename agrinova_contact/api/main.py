"""
FastAPI application - contact form relay entry point

Run locally:
  uvicorn agrinova_contact.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import Response

from agrinova_contact.api.contact_handler import ContactHandler
from agrinova_contact.api.dependencies import ContactContext, get_context

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="AgriNova Contact Relay",
    description="Relays website contact form submissions to Zoho Mail",
    version="1.0.0",
)

CONTACT_PATHS = ("/contact", "/api/contact", "/.netlify/functions/contact")
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


async def contact(request: Request, context: ContactContext = Depends(get_context)) -> Response:
    body = await request.body()
    result = await ContactHandler(context).handle(request.method, dict(request.headers), body)
    return Response(
        content=result.render_body(),
        status_code=result.status_code,
        headers=result.headers,
        media_type=None,
    )


for _path in CONTACT_PATHS:
    app.add_api_route(_path, contact, methods=ALL_METHODS, include_in_schema=_path == "/contact")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    context = get_context()
    logger.info(
        "Contact relay ready: origin=%s account_configured=%s rate_limit=%d/%ss",
        context.settings.allowed_origin,
        bool(context.settings.account_id),
        context.config.rate_limit.max_requests,
        context.config.rate_limit.window_seconds,
    )
