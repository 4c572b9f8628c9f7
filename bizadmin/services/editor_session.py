from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from pydantic import BaseModel, ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from bizadmin.schemas.editor import (
    DeletePayload,
    FieldChangePayload,
    OpenEditorPayload,
    ResizePayload,
    SearchPayload,
    WsEnvelope,
)
from .list_editor import ListEditor
from .viewport import ViewportObserver

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Drives one ListEditor over a WebSocket connection.

    Local operations (search, field changes, open/close, resize) are applied
    immediately and answered with a fresh view. Backend operations (submit,
    delete, reload) run as tasks so later messages keep being handled while
    they are in flight; each pushes a view when it completes. The editor is
    disposed when the connection ends.
    """

    def __init__(self, websocket: WebSocket, editor: ListEditor, viewport: ViewportObserver) -> None:
        self.websocket = websocket
        self.editor = editor
        self.viewport = viewport
        self._pending: Set[asyncio.Task] = set()
        self._closed = False
        self._local: Dict[str, Callable[[Dict[str, Any]], Optional[str]]] = {
            "search": self._search,
            "editor.open": self._open,
            "editor.close": self._close,
            "field.change": self._field_change,
            "select.change": self._select_change,
            "viewport.resize": self._resize,
        }
        self._remote: Dict[str, Callable[[Dict[str, Any]], Awaitable[Any]]] = {
            "submit": lambda _: self.editor.submit(),
            "delete": self._delete,
            "reload": lambda _: self.editor.reload(),
        }

    @property
    def entity(self) -> str:
        return self.editor.config.entity

    @property
    def pending(self) -> Set[asyncio.Task]:
        return set(self._pending)

    # PUBLIC_INTERFACE
    async def run(self) -> None:
        """Load the editor, push the first view, then serve client messages until disconnect."""
        await self.editor.load()
        await self.push_view()
        try:
            while True:
                data = await self.websocket.receive_json()
                await self.handle(data)
        except WebSocketDisconnect:
            logger.info("Editor session closed for %s", self.entity)
        finally:
            self._closed = True
            self.editor.dispose()

    # PUBLIC_INTERFACE
    async def handle(self, data: Any) -> None:
        """Dispatch one client envelope."""
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            await self.send_error("Malformed message; expected {type, payload}")
            return
        msg_type = data["type"]
        payload = data.get("payload") or {}

        if msg_type == "ping":
            await self.send(WsEnvelope(type="pong", channel=self.entity))
            return

        if msg_type in self._local:
            try:
                problem = self._local[msg_type](payload)
            except ValidationError as exc:
                await self.send_error(f"Invalid payload for {msg_type}", details=exc.errors(include_url=False, include_context=False))
                return
            if problem:
                await self.send_error(problem)
                return
            await self.push_view()
            return

        if msg_type in self._remote:
            task = asyncio.create_task(self._run_remote(msg_type, payload))
            self._pending.add(task)
            task.add_done_callback(self._remote_done)
            return

        await self.send_error(f"Unsupported message type: {msg_type}")

    async def _run_remote(self, msg_type: str, payload: Dict[str, Any]) -> None:
        try:
            await self._remote[msg_type](payload)
        except ValidationError as exc:
            await self.send_error(f"Invalid payload for {msg_type}", details=exc.errors(include_url=False, include_context=False))
            return
        await self.push_view()

    def _remote_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Editor operation failed in %s session", self.entity, exc_info=exc)

    # Local handlers return an error message, or None on success.

    def _search(self, payload: Dict[str, Any]) -> Optional[str]:
        self.editor.search(SearchPayload.model_validate(payload).term)
        return None

    def _open(self, payload: Dict[str, Any]) -> Optional[str]:
        code = OpenEditorPayload.model_validate(payload).code
        if code is None:
            self.editor.open_create()
            return None
        record = self.editor.find(code)
        if record is None:
            return f"No {self.entity} record with code {code!r}"
        self.editor.open_edit(record)
        return None

    def _close(self, payload: Dict[str, Any]) -> Optional[str]:
        self.editor.close()
        return None

    def _field_change(self, payload: Dict[str, Any]) -> Optional[str]:
        change = FieldChangePayload.model_validate(payload)
        self.editor.change_field(change.name, change.value)
        return None

    def _select_change(self, payload: Dict[str, Any]) -> Optional[str]:
        change = FieldChangePayload.model_validate(payload)
        self.editor.change_select(change.name, change.value)
        return None

    def _resize(self, payload: Dict[str, Any]) -> Optional[str]:
        self.viewport.resize(ResizePayload.model_validate(payload).width)
        return None

    async def _delete(self, payload: Dict[str, Any]) -> None:
        await self.editor.delete(DeletePayload.model_validate(payload).code)

    # Outbound

    async def push_view(self) -> None:
        view = self.editor.render()
        await self.send(WsEnvelope(type="editor.view", payload=view.model_dump(mode="json"), channel=self.entity))

    async def send_error(self, message: str, details: Any = None) -> None:
        payload: Dict[str, Any] = {"message": message}
        if details is not None:
            payload["details"] = details
        await self.send(WsEnvelope(type="error", payload=payload, channel=self.entity))

    async def send(self, envelope: BaseModel) -> None:
        if self._closed or self.websocket.application_state == WebSocketState.DISCONNECTED:
            logger.debug("Dropping %s message for closed %s session", getattr(envelope, "type", "?"), self.entity)
            return
        try:
            await self.websocket.send_json(envelope.model_dump(mode="json"))
        except (WebSocketDisconnect, RuntimeError):
            logger.info("Client of %s session went away during send", self.entity)
            self._closed = True
