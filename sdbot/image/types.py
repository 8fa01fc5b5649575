"""Data contracts for the txt2img call.

`GenerationRequest` is built fresh per chat command from the current
`RuntimeConfig` and rendered to the sdapi JSON body; `GenerationResponse`
wraps the `images` list parsed from the service reply.
"""

from dataclasses import dataclass, field
from typing import Any

from sdbot.config.runtime import RuntimeConfig
from sdbot.core.errors import DecodeError

RANDOM_SEED = -1


@dataclass(frozen=True)
class GenerationRequest:
    """One txt2img request.

    Attributes mirror the sdapi field names after `to_payload()`. Width,
    height and steps are positive; `seed=-1` asks the service for a random seed.
    """

    prompt: str
    negative_prompt: str = ""
    steps: int = 20
    width: int = 512
    height: int = 512
    seed: int = RANDOM_SEED
    cfg_scale: float = 7.0
    batch_size: int = 1
    n_iter: int = 1
    sampler_index: str = "Euler a"
    restore_faces: bool = False
    tiling: bool = False
    enable_hr: bool = False

    @classmethod
    def from_config(cls, prompt: str, config: RuntimeConfig) -> "GenerationRequest":
        # hi-res fix, batch size, iteration count and seed are fixed per request
        return cls(
            prompt=prompt,
            negative_prompt=config.negative_prompt,
            steps=config.steps,
            width=config.width,
            height=config.height,
            seed=RANDOM_SEED,
            cfg_scale=config.cfg_scale,
            batch_size=1,
            n_iter=1,
            sampler_index=config.sampler,
            restore_faces=config.restore_faces,
            tiling=config.tiling,
            enable_hr=False,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "enable_hr": self.enable_hr,
            "prompt": self.prompt,
            "negative_prompt": self.negative_prompt,
            "styles": [],
            "seed": self.seed,
            "batch_size": self.batch_size,
            "n_iter": self.n_iter,
            "steps": self.steps,
            "cfg_scale": self.cfg_scale,
            "width": self.width,
            "height": self.height,
            "restore_faces": self.restore_faces,
            "tiling": self.tiling,
            "override_settings": {},
            "sampler_index": self.sampler_index,
        }


@dataclass
class GenerationResponse:
    """Base64 image payloads returned by the service, in order."""

    images: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "GenerationResponse":
        if not isinstance(data, dict):
            raise DecodeError("txt2img response is not a JSON object")
        images = data.get("images") or []
        if not isinstance(images, list):
            raise DecodeError("txt2img response field 'images' is not a list")
        return cls(images=images)

    def first_image(self) -> str:
        if not self.images or not isinstance(self.images[0], str):
            raise DecodeError("txt2img response contained no images")
        return self.images[0]


@dataclass(frozen=True)
class GeneratedImage:
    """Result of a successful generation: the written file and its inputs."""

    path: str
    prompt: str
    slug: str
