"""
Gemini calls used by the style editor: turning a description or reference
image into style fields, and rendering a preview image for a style prompt.
"""
from __future__ import annotations

import base64
import json
from typing import Any, Dict, Optional, Tuple

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..exceptions import BadRequestError, UpstreamServiceError
from ..logger import logger

STYLE_EXTRACTION_PROMPT = """You are a style extraction assistant. Convert the user's input into a JSON object that matches this schema:
{
  "name": string,
  "key": string,
  "description": string,
  "status": "active" | "archived",
  "isDefault": boolean,
  "previewImageUrl": string,
  "visualStyle": {
    "styleName": string,
    "medium": string,
    "lineart": string,
    "coloring": string,
    "lighting": string,
    "anatomy": string
  },
  "systemPrompt": string,
  "promptTemplate": string,
  "technicalTags": string,
  "negativePrompt": string,
  "continuityRules": string,
  "formatGuidelines": string,
  "interactionLanguage": string,
  "promptLanguage": string,
  "safety": {
    "sfwOnly": boolean
  }
}
Rules:
- Output ONLY valid JSON. No markdown, no code fences, no extra commentary.
- If a field is unknown, omit it.
- Keep strings concise, preserve original language for labels.
- Ensure promptTemplate remains in English unless explicitly requested otherwise."""

IMAGE_EXTRACTION_INSTRUCTION = "Extract the style details from this reference image."


def extract_json_from_text(text: str) -> Dict[str, Any]:
    """Parse the outermost ``{...}`` span of a model reply."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("No JSON found in response")
    parsed = json.loads(text[start:end + 1])
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object")
    return parsed


def strip_data_url_prefix(data: str) -> str:
    comma = data.find(",")
    if comma == -1:
        return data
    return data[comma + 1:]


def compose_preview_prompt(prompt: str, negative_prompt: Optional[str] = None) -> str:
    prompt = prompt.strip()
    negative = (negative_prompt or "").strip()
    if negative:
        return f"{prompt}\nNegative prompt: {negative}"
    return prompt


def _client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def extract_style(
    api_key: str,
    model: str,
    *,
    prompt: Optional[str] = None,
    image_data: Optional[str] = None,
    image_mime_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Ask Gemini for style fields from a free-text prompt or a reference image.

    Exactly one of ``prompt`` / ``image_data`` is expected; the image may be a
    bare base64 string or a data URL.
    """
    parts = [types.Part.from_text(text=STYLE_EXTRACTION_PROMPT)]
    if image_data is not None:
        try:
            image_bytes = base64.b64decode(strip_data_url_prefix(image_data), validate=True)
        except ValueError:
            raise BadRequestError("Image data is not valid base64.", "INVALID_IMAGE")
        parts.append(types.Part.from_text(text=IMAGE_EXTRACTION_INSTRUCTION))
        parts.append(types.Part.from_bytes(data=image_bytes, mime_type=image_mime_type or "image/png"))
    else:
        parts.append(types.Part.from_text(text=f"User prompt:\n{prompt or ''}"))

    try:
        response = _client(api_key).models.generate_content(
            model=model,
            contents=[types.Content(role="user", parts=parts)],
        )
        extracted = extract_json_from_text(response.text or "")
    except (genai_errors.APIError, ValueError) as e:
        logger.error(f"Gemini style extraction failed: {e}", extra={"model": model})
        raise UpstreamServiceError("Failed to extract style with Gemini.")

    logger.info("Extracted style with Gemini", extra={"model": model, "fields": sorted(extracted.keys())})
    return extracted


def _first_inline_image(response: Any) -> Optional[Tuple[str, bytes]]:
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return inline.mime_type or "image/png", inline.data
    return None


def generate_preview_image(api_key: str, model: str, prompt: str) -> str:
    """Render ``prompt`` with an image model and return it as a data URL."""
    client = _client(api_key)
    contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]

    try:
        try:
            response = client.models.generate_content(
                model=model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
        except genai_errors.APIError as e:
            # Retry once with the model's default modalities
            logger.warning(f"Preview with response modalities failed: {e}", extra={"model": model})
            response = client.models.generate_content(model=model, contents=contents)
    except genai_errors.APIError as e:
        logger.error(f"Gemini image generation failed: {e}", extra={"model": model})
        raise UpstreamServiceError("Image generation failed.")

    image = _first_inline_image(response)
    if image is None:
        logger.error("Gemini returned no inline image", extra={"model": model})
        raise UpstreamServiceError("Invalid image response.")

    mime_type, data = image
    encoded = base64.b64encode(data).decode("ascii") if isinstance(data, bytes) else data
    return f"data:{mime_type};base64,{encoded}"
