# main.py
import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from config import HOST, PORT
from engine import PredictionEngine
from loader import default_loader

logger = logging.getLogger(__name__)

# --- Engine: queries answer empty until the background load publishes the model ---
engine = PredictionEngine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine.load_in_background(default_loader)
    yield


app = FastAPI(lifespan=lifespan)


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"ready": engine.ready()}


@app.get("/suggestions")
async def suggestions(text: str = "") -> Dict[str, Any]:
    return {"suggestions": engine.suggestions(text)}


@app.get("/correct")
async def correct(word: str) -> Dict[str, Any]:
    # full vocabulary scan: keep it off the event loop
    correction = await asyncio.to_thread(engine.correct, word)
    return {"word": word, "correction": correction}


def _parse_message(raw: str) -> Dict[str, Any]:
    try:
        payload = json.loads(raw)
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        # plain text message: treat it as the text up to the cursor
        payload = {"type": "suggest", "text": raw, "cursor": len(raw), "seq": 0}
    return payload


def _left_of_cursor(payload: Dict[str, Any]) -> str:
    text = payload.get("text")
    text = "" if text is None else str(text)
    cursor = payload.get("cursor")
    # bool is an int subclass; JSON true is not a position
    if isinstance(cursor, bool) or not isinstance(cursor, int) or not 0 <= cursor <= len(text):
        cursor = len(text)
    return text[:cursor]


async def _send(websocket: WebSocket, message: Dict[str, Any]) -> bool:
    """Send unless the client already went away; returns whether it was sent."""
    try:
        await websocket.send_json(message)
    except (WebSocketDisconnect, RuntimeError):
        logger.debug("Dropped %s reply for closed WebSocket", message.get("type"))
        return False
    return True


class _Sequencer:
    """Tracks the newest query seq on one connection so stale replies can be dropped."""

    def __init__(self):
        self.latest = -1

    def observe(self, seq: int) -> None:
        self.latest = max(self.latest, seq)

    def is_current(self, seq: int) -> bool:
        return seq >= self.latest


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket expects JSON messages from client:
    {
        "type": "suggest" | "autocorrect",
        "text": "<full input text>",
        "cursor": <cursor_position_int>,
        "seq": <monotonically increasing int>
    }
    Server returns JSON:
    {"type": "suggestions", "seq": ..., "suggestions": [up to 3 words]}
    {"type": "correction", "seq": ..., "word": "<typed word or null>", "correction": "<word or null>"}
    Replies for queries older than the newest one received are dropped.
    """
    await websocket.accept()
    sequencer = _Sequencer()
    pending: set = set()

    async def autocorrect_task(left_snapshot: str, seq_snapshot: int):
        result = await asyncio.to_thread(engine.autocorrect, left_snapshot)
        # user kept typing: this correction no longer applies
        if not sequencer.is_current(seq_snapshot):
            return
        word: Optional[str] = result.original if result else None
        replacement: Optional[str] = result.replacement if result else None
        if result:
            logger.debug("Autocorrected %r -> %r", word, replacement)
        await _send(
            websocket,
            {"type": "correction", "seq": seq_snapshot, "word": word, "correction": replacement},
        )

    try:
        while True:
            raw = await websocket.receive_text()
            payload = _parse_message(raw)
            seq = payload.get("seq", 0)
            if not isinstance(seq, int):
                seq = 0
            sequencer.observe(seq)
            left = _left_of_cursor(payload)

            if payload.get("type") == "autocorrect":
                task = asyncio.create_task(autocorrect_task(left, seq))
                pending.add(task)
                task.add_done_callback(pending.discard)
                continue

            # suggestions are a bounded lookup, answer inline
            words = engine.suggestions(left)
            await websocket.send_json({"type": "suggestions", "seq": seq, "suggestions": words})

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
    finally:
        for task in pending:
            task.cancel()


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


if __name__ == "__main__":
    configure_logging()
    uvicorn.run("main:app", host=HOST, port=PORT, reload=False)
