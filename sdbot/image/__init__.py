"""Image generation package.

Scope:
    Provides the txt2img transport client and the generation pipeline used by
    `sd <prompt>` commands.

Non-goals:
    - No queueing of concurrent requests.
    - No retry/backoff.
    - No cleanup of generated files.
"""
