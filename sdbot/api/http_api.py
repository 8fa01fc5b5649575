"""
HTTP chat surface for sdbot.

Architectural role:
- Lets chat-protocol glue (or any HTTP client) submit `sd ...` messages and
  receive the reply lines in one response.
- Owns one process-wide `RuntimeConfig`, passed explicitly to the engine.

Endpoint responsibilities:
- `POST /v1/commands`: run one chat message, return `handled` + `replies`.
- `GET /v1/vars`: current runtime config as JSON.
- `GET /health`: liveness probe.

Concurrency:
- Endpoints are sync functions, so FastAPI runs them in its threadpool. A
  command blocks its worker until generation and upload finish; replies for
  one request keep their order.

Side effects:
- Loads environment variables at import time via `load_dotenv()` (through
  `sdbot.config.settings`).
"""

from dataclasses import asdict

from fastapi import FastAPI
from pydantic import BaseModel

from sdbot.config import settings
from sdbot.config.runtime import RuntimeConfig, load_runtime_config
from sdbot.core.engine import process_message

settings.configure_logging()

app = FastAPI(title="sdbot", version="0.1.0")
app.state.runtime_config = load_runtime_config()


# ============================================================
# Request / Response Schema
# ============================================================

class CommandRequest(BaseModel):
    message: str
    sender: str = ""


class CommandResponse(BaseModel):
    handled: bool
    replies: list[str]


def get_runtime_config() -> RuntimeConfig:
    return app.state.runtime_config


# ============================================================
# Endpoints
# ============================================================

@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/v1/vars")
def get_vars():
    return asdict(get_runtime_config())


@app.post("/v1/commands", response_model=CommandResponse)
def run_command(request: CommandRequest):
    """
    Run one chat message through the engine and collect its replies.

    The "processing" notice and the final result come back together, in the
    order the engine produced them.
    """
    replies: list[str] = []
    handled = process_message(
        request.message,
        get_runtime_config(),
        replies.append,
        sender=request.sender,
    )
    return CommandResponse(handled=handled, replies=replies)
