import json

import pytest

from sdbot.config.runtime import RuntimeConfig

SD_ENV_VARS = (
    "SD_HOST", "SD_STEPS", "SD_WIDTH", "SD_HEIGHT", "SD_CFG_SCALE", "SD_SAMPLER",
    "SD_NEGATIVE_PROMPT", "SD_RESTORE_FACES", "SD_TILING", "SD_BAD_WORDS",
    "SD_BAD_WORDS_PROMPT", "SD_RELAY_URL", "SD_TRIGGER", "SD_REQUEST_TIMEOUT",
    "SD_UPLOAD_TIMEOUT", "SD_DOWNLOAD_TIMEOUT", "SD_OUTPUT_DIR", "DEBUG",
)


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, status_code=200, json_data=None, text=None, content=b""):
        self.status_code = status_code
        self._json_data = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text
        self.content = content

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_data is None:
            return json.loads(self.text)
        return self._json_data

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from a developer `.env` and write files into tmp_path."""
    for name in SD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def runtime_config():
    return RuntimeConfig(
        host="http://sd.test:7860",
        steps=25,
        width=512,
        height=768,
        cfg_scale=7.5,
        sampler="Euler a",
        negative_prompt="blurry",
        bad_words=["Badword", "nasty"],
        bad_words_prompt="a friendly robot",
        relay_url="https://relay.test/",
    )


@pytest.fixture
def replies():
    return []
