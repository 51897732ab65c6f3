"""Slack slash command and direct question endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from docubot.api.deps import get_docubot, get_settings
from docubot.bot.pipeline import DocuBot
from docubot.bot.schemas import AskRequest
from docubot.config import Settings
from docubot.constants.security import ANONYMOUS_USER
from docubot.slack.signature import verify_slack_signature

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["slack"])


async def verify_request(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Reject requests without a valid Slack signature.

    Only enforced when a signing secret is configured. Applies to every
    endpoint that accepts a response_url or configuration overrides.
    """
    if not settings.slack_signing_secret:
        return

    body = await request.body()
    if not verify_slack_signature(
        settings.slack_signing_secret,
        request.headers.get("X-Slack-Request-Timestamp"),
        body,
        request.headers.get("X-Slack-Signature"),
    ):
        logger.warning(f"Rejected {request.url.path} request with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Slack signature",
        )


async def _dispatch(
    ask: AskRequest, bot: DocuBot, background_tasks: BackgroundTasks
) -> JSONResponse:
    """Run the synchronous part of the pipeline and schedule the rest.

    Background tasks run after the response has been sent, so the
    acknowledgment always reaches Slack before the deferred answer.
    """
    result = await bot.handle(ask)
    if result.deferred is not None:
        background_tasks.add_task(result.deferred)
    return JSONResponse(
        status_code=result.response.status_code,
        content=result.response.body.to_payload(),
    )


@router.post("/slack/commands", dependencies=[Depends(verify_request)])
async def slash_command(
    request: Request,
    background_tasks: BackgroundTasks,
    bot: DocuBot = Depends(get_docubot),
) -> JSONResponse:
    """Handle a Slack slash command (form-encoded)."""
    form = await request.form()
    ask = AskRequest(
        user_id=str(form.get("user_id") or ANONYMOUS_USER),
        text=str(form.get("text") or ""),
        response_url=str(form.get("response_url") or "") or None,
    )
    return await _dispatch(ask, bot, background_tasks)


@router.post("/ask", dependencies=[Depends(verify_request)])
async def ask_question(
    ask: AskRequest,
    background_tasks: BackgroundTasks,
    bot: DocuBot = Depends(get_docubot),
) -> JSONResponse:
    """Ask a question directly (JSON).

    Same behavior and signing requirement as the slash command; the raw JSON
    body is what gets signed. The deferred answer goes to response_url when
    one is given.
    """
    return await _dispatch(ask, bot, background_tasks)
