"""sdbot chat-surface adapters.

Architectural role:
- `cli`: interactive terminal loop.
- `http_api`: FastAPI app accepting chat messages over HTTP.

Both only translate transport concerns; command handling lives in
`sdbot.core.engine`.
"""
