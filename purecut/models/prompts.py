from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PromptConfig:
    #immutable prompt config
    name: str
    version: str
    text: str

    @property
    def ref(self) -> str:
        return f"{self.name}@{self.version}"


REMOVE_BACKGROUND = PromptConfig(
    name="cutout/remove_background",
    version="v1",
    text=(
        "Remove the background from this image and return only the subject "
        "with a transparent background. Output the result as an image."
    ),
)

REMOVE_BACKGROUND_INSTRUCTION = REMOVE_BACKGROUND.text
