"""Slack Socket Mode transport for the command router."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional

from slack_sdk.errors import SlackApiError
from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse
from slack_sdk.web.async_client import AsyncWebClient

from .i_chat_adapter import IChatAdapter
from ..core.errors import SlackError
from ..core.router import Router

LOGGER = logging.getLogger(__name__)

# Plain messages, edits, and thread replies also posted to the channel.
ROUTED_SUBTYPES = frozenset({None, "message_changed", "thread_broadcast"})


def message_author(event: Dict[str, Any]) -> Optional[str]:
    """Return the human author of a routable message event, or None.

    For ``message_changed`` events the author is read from the edited
    message. Bot posts and other subtypes (joins, topic changes) yield None.
    """
    if event.get("type") != "message":
        return None
    subtype = event.get("subtype")
    if subtype not in ROUTED_SUBTYPES:
        return None
    message = (event.get("message") or {}) if subtype == "message_changed" else event
    if message.get("bot_id"):
        return None
    return message.get("user")


class SlackAdapter(IChatAdapter):
    platform = "slack"

    def __init__(
        self,
        bot_token: str,
        app_token: str,
        allowed_user_ids: Iterable[str],
        router: Router,
    ) -> None:
        self._web = AsyncWebClient(token=bot_token)
        self._socket = SocketModeClient(app_token=app_token, web_client=self._web)
        self._router = router
        self._allowed = frozenset(allowed_user_ids)
        self._closed = asyncio.Event()
        self._socket.socket_mode_request_listeners.append(self._on_socket_request)

    async def send_message(self, channel: str, thread_ts: str, text: str) -> Optional[str]:
        try:
            response = await self._web.chat_postMessage(
                channel=channel, text=text, thread_ts=thread_ts or None
            )
        except SlackApiError as exc:
            raise SlackError(f"Failed to send Slack message: {exc}") from exc
        return response.get("ts")

    async def start(self) -> None:
        await self._resolve_bot_user_id()
        LOGGER.info("Opening Socket Mode connection")
        await self._socket.connect()
        await self._closed.wait()

    async def stop(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        await self._socket.close()

    async def _resolve_bot_user_id(self) -> None:
        """Look up our own user ID so mentions work as a prefix."""
        try:
            identity = await self._web.auth_test()
        except SlackApiError as exc:
            raise SlackError(f"Failed to authenticate with Slack: {exc}") from exc
        self._router.bot_user_id = identity.get("user_id")
        LOGGER.info("Authenticated as Slack user %s", self._router.bot_user_id)

    async def _on_socket_request(self, client: SocketModeClient, req: SocketModeRequest) -> None:
        # Slack redelivers envelopes that are not acknowledged within 3 seconds.
        await client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))
        if req.type != "events_api":
            return

        event = (req.payload or {}).get("event") or {}
        author = message_author(event)
        if author is None:
            LOGGER.debug("Skipping %s event (subtype %s)", event.get("type"), event.get("subtype"))
            return
        if author not in self._allowed:
            LOGGER.debug("Skipping message from user %s outside the allow list", author)
            return

        await self._router.handle_message(event)
