"""Tests for chat command dispatch."""
import os

import pytest

from sdbot.core import engine
from sdbot.core.errors import StatusError
from sdbot.image.types import GeneratedImage
from sdbot.relay.uploader import UploadResult


@pytest.fixture
def fake_pipeline(monkeypatch, tmp_path):
    """Replace generation and upload with recorders."""
    recorded = {"uploaded": [], "prompts": []}

    def fake_generate(prompt, config, notify=None, output_dir=None):
        notify(f"Processing Stable Diffusion: {prompt}...")
        recorded["prompts"].append(prompt)
        path = str(tmp_path / "a-cat_7.png")
        with open(path, "wb") as f:
            f.write(b"png")
        return GeneratedImage(path=path, prompt=prompt, slug="a-cat")

    def fake_upload(path, url):
        recorded["uploaded"].append((path, url))
        return recorded.get("upload_result", UploadResult(ok=True, body="https://filehole.org/x1y2z.png\n"))

    monkeypatch.setattr(engine, "generate_image", fake_generate)
    monkeypatch.setattr(engine, "upload_file", fake_upload)
    return recorded


def test_ignores_messages_without_trigger(runtime_config, replies):
    assert engine.process_message("hello there", runtime_config, replies.append) is False
    assert engine.process_message("sdfoo", runtime_config, replies.append) is False
    assert replies == []


def test_bare_trigger_shows_usage(runtime_config, replies):
    assert engine.process_message("sd", runtime_config, replies.append) is True
    assert replies[0].startswith("Usage:")


def test_generate_uploads_and_addresses_sender(runtime_config, replies, fake_pipeline, tmp_path):
    handled = engine.process_message("sd a cat", runtime_config, replies.append, sender="alice")

    assert handled
    assert replies == [
        "Processing Stable Diffusion: a cat...",
        "alice: https://filehole.org/x1y2z.png",
    ]
    assert fake_pipeline["uploaded"] == [(str(tmp_path / "a-cat_7.png"), "https://relay.test/")]


def test_upload_failure_is_reported(runtime_config, replies, fake_pipeline):
    fake_pipeline["upload_result"] = UploadResult(ok=False, error="connection reset")

    engine.process_message("sd a cat", runtime_config, replies.append, sender="bob")

    assert replies[-1] == "bob: Upload failed (connection reset)"


def test_generation_error_is_replied(monkeypatch, runtime_config, replies):
    def failing_generate(prompt, config, notify=None, output_dir=None):
        notify("Processing Stable Diffusion: a cat...")
        raise StatusError(503, user_message="SD host unavailable (HTTP 503)")

    uploads = []
    monkeypatch.setattr(engine, "generate_image", failing_generate)
    monkeypatch.setattr(engine, "upload_file", lambda *args: uploads.append(args))

    assert engine.process_message("sd a cat", runtime_config, replies.append) is True
    assert replies == ["Processing Stable Diffusion: a cat...", "SD host unavailable (HTTP 503)"]
    assert uploads == []


def test_unexpected_error_does_not_escape(monkeypatch, runtime_config, replies):
    def broken_generate(*args, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(engine, "generate_image", broken_generate)

    engine.process_message("sd a cat", runtime_config, replies.append)

    assert replies == [engine.UNEXPECTED_FAILURE]


def test_admin_commands_through_engine(runtime_config, replies):
    engine.process_message("sd set steps abc", runtime_config, replies.append)
    assert runtime_config.steps == 25
    assert "invalid literal" in replies[-1]

    engine.process_message("sd set steps 30", runtime_config, replies.append)
    assert replies[-1] == "Updated sd steps to: 30"

    engine.process_message("sd vars", runtime_config, replies.append)
    assert "Steps: 30" in replies[-1]


def test_invalid_sampler_through_engine(runtime_config, replies):
    engine.process_message('sd set sampler "Foo"', runtime_config, replies.append)

    assert runtime_config.sampler == "Euler a"
    assert "Invalid sampler" in replies[-1]


def test_custom_trigger(runtime_config, replies, monkeypatch):
    monkeypatch.setenv("SD_TRIGGER", "!img")

    assert engine.process_message("sd vars", runtime_config, replies.append) is False
    assert engine.process_message("!img vars", runtime_config, replies.append) is True


def test_end_to_end_with_fake_services(monkeypatch, runtime_config, replies, tmp_path):
    """Real pipeline modules, fake HTTP: the uploaded path is the written file."""
    import base64

    import requests

    from conftest import FakeResponse

    payload = base64.b64encode(b"real-png").decode()
    uploaded = []

    # client and uploader share the requests module, so one fake routes by URL
    def fake_post(url, **kwargs):
        if url == "http://sd.test:7860/sdapi/v1/txt2img":
            return FakeResponse(200, {"images": [payload]})
        if url == "https://relay.test/":
            name, handle, _ = kwargs["files"]["file"]
            uploaded.append((handle.name, handle.read()))
            return FakeResponse(200, text="https://filehole.org/abcde.png")
        raise AssertionError(f"unexpected POST to {url}")

    monkeypatch.setattr(requests, "post", fake_post)

    engine.process_message("sd Cat: a very/cool*pic?", runtime_config, replies.append, sender="carol")

    written = list(tmp_path.iterdir())
    assert len(written) == 1
    assert written[0].name.startswith("cat--a-very-cool-pic-_")
    assert uploaded == [(os.path.abspath(str(written[0])), b"real-png")]
    assert replies == [
        "Processing Stable Diffusion: Cat: a very/cool*pic?...",
        "carol: https://filehole.org/abcde.png",
    ]
