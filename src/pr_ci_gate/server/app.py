"""FastAPI app factory.

The webhook endpoint is a thin wrapper over :class:`WhitelistDispatcher`.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import Any

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from pr_ci_gate import __version__, events
from pr_ci_gate.config import GateSettings, load_format_config
from pr_ci_gate.dispatcher import WhitelistDispatcher
from pr_ci_gate.errors import CITriggerError, MalformedEventError, PersistenceError

logger = logging.getLogger(__name__)

BUILD_ACTIONS = {"opened", "reopened", "synchronize"}


def _verify_signature(secret: str, body: bytes, signature: str | None) -> None:
    if not secret:
        return
    expected = "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    if signature is None or not hmac.compare_digest(expected, signature):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")


def create_app(
    settings: GateSettings | None = None,
    dispatcher: WhitelistDispatcher | None = None,
) -> FastAPI:
    settings = settings or GateSettings()
    if dispatcher is None:
        dispatcher = WhitelistDispatcher.from_config(
            load_format_config(settings.format_config_file), settings
        )

    app = FastAPI(
        title="PR CI Gate",
        version=__version__,
        description="Pull request comment commands gating CI builds behind a whitelist.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": __version__,
            "whitelistEnabled": dispatcher.whitelisting_enabled,
            "commands": [c.key for c in dispatcher.commands],
            "ci": [c.key for c in dispatcher.continuous_integrations],
        }

    @app.post("/api/webhook")
    async def webhook(
        request: Request,
        x_github_event: str = Header(default=""),
        x_hub_signature_256: str | None = Header(default=None),
    ) -> dict[str, Any]:
        body = await request.body()
        _verify_signature(settings.webhook_secret, body, x_hub_signature_256)
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid JSON payload: {e}") from e
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Payload must be a JSON object")

        try:
            return await run_in_threadpool(_handle_event, dispatcher, x_github_event, payload)
        except MalformedEventError as e:
            logger.warning("Malformed webhook payload", extra={"event": x_github_event})
            raise HTTPException(status_code=400, detail=str(e)) from e
        except CITriggerError as e:
            raise HTTPException(status_code=502, detail=str(e)) from e
        except PersistenceError as e:
            logger.exception("Authorization list write failed")
            raise HTTPException(status_code=500, detail=str(e)) from e

    return app


def _handle_event(
    dispatcher: WhitelistDispatcher, event_name: str, payload: dict[str, Any]
) -> dict[str, Any]:
    if event_name == "issue_comment":
        fired = dispatcher.process_pr_comment(payload)
        return {"status": "processed", "commands": fired}

    if event_name == "pull_request":
        if events.get_action(payload) not in BUILD_ACTIONS:
            return {"status": "ignored"}
        author = events.get_pull_request_author(payload)
        if not dispatcher.should_build_pull_request(author):
            logger.info("Pull request author not whitelisted", extra={"user": author})
            return {"status": "skipped", "user": author}
        dispatcher.trigger_ci(payload)
        return {"status": "triggered", "user": author}

    return {"status": "ignored"}
