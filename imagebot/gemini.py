"""
Gemini image generation client.
One request per prompt, no retries; failures surface as GenerationError or
TransportError.
"""

import base64
from pathlib import Path
from typing import Optional, Union

from google import genai
from google.genai import types

from .async_operations import time_operation
from .config import GEMINI_API_KEY, GEMINI_IMAGE_MODEL
from .errors import GenerationError, TransportError
from .logger import logger


class GeminiImageClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or GEMINI_API_KEY
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not provided or set in environment")
        self.model = model or GEMINI_IMAGE_MODEL
        self.client = genai.Client(api_key=self.api_key)
        self.generation_config = types.GenerateContentConfig(
            response_modalities=[types.Modality.TEXT, types.Modality.IMAGE],
        )

    @time_operation("gemini_image_generation")
    async def generate(self, prompt: str, destination: Union[str, Path]) -> Path:
        """
        Generate an image for `prompt` and write it to `destination`

        Returns:
            Path: the written file

        Raises:
            GenerationError: the response carried no image
            TransportError: the request itself failed
        """
        destination = Path(destination)
        logger.info(f"Generating image for prompt: '{prompt}'")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=self.generation_config,
            )
        except Exception as e:
            logger.error(f"Gemini image generation error: {e}")
            raise TransportError(f"Failed to generate image: {e}") from e

        candidates = response.candidates
        if not candidates:
            raise GenerationError("No candidates returned from Gemini API")

        content = candidates[0].content
        if not content or not content.parts:
            raise GenerationError("No content parts returned from Gemini API")

        for part in content.parts:
            if part.text:
                logger.info(f"Gemini response text: {part.text}")
            elif part.inline_data and part.inline_data.data:
                image_data = part.inline_data.data
                if isinstance(image_data, str):
                    image_data = base64.b64decode(image_data)
                destination.write_bytes(image_data)
                logger.info(f"Image saved successfully at {destination}")
                return destination

        raise GenerationError("No image data found in Gemini API response")
