from purecut.models.providers.base import ModelRequest, InlineImagePart, TextPart
from purecut.models.prompts import REMOVE_BACKGROUND, REMOVE_BACKGROUND_INSTRUCTION
from purecut.pipeline.cutout import codec
from purecut.pipeline.cutout.request_builder import build_request, DEFAULT_MODEL
from .fixtures.replies import SOURCE_BYTES, b64


class TestBuildRequest:

    def test_two_ordered_parts(self):
        """
        Test: Request layout
        How: Build from a JPEG asset
        Ensures: Inline image first with the asset's media type, instruction second
        """
        asset = codec.ingest(SOURCE_BYTES, "image/jpeg")
        request = build_request(asset)

        assert isinstance(request, ModelRequest)
        assert len(request.parts) == 2
        image, instruction = request.parts
        assert image == InlineImagePart(data=b64(SOURCE_BYTES), media_type="image/jpeg")
        assert instruction == TextPart(text=REMOVE_BACKGROUND_INSTRUCTION)

    def test_instruction_text(self):
        assert REMOVE_BACKGROUND_INSTRUCTION == (
            "Remove the background from this image and return only the subject "
            "with a transparent background. Output the result as an image."
        )
        assert REMOVE_BACKGROUND.ref == "cutout/remove_background@v1"

    def test_deterministic(self):
        asset = codec.ingest(SOURCE_BYTES, "image/png")
        assert build_request(asset) == build_request(asset)

    def test_model_and_params(self):
        asset = codec.ingest(SOURCE_BYTES, "image/png")

        default = build_request(asset)
        assert default.model == DEFAULT_MODEL
        assert default.params is None

        params = {"response_modalities": ["IMAGE", "TEXT"]}
        custom = build_request(asset, model="gemini-3-pro-image-preview", params=params)
        assert custom.model == "gemini-3-pro-image-preview"
        assert custom.params == params
        assert custom.params is not params
