# app/services/ai_service.py
import base64
from functools import lru_cache

from openai import OpenAI
from openai import APIError, APITimeoutError, RateLimitError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.config import settings
from app.core.logger import logger

SYSTEM_PROMPT = (
    "You are a professional storyteller. Rewrite the following memory into a beautiful, "
    "polished, and emotional short story. If a photo is attached, let it inspire the details. "
    "Keep it under 100 words."
)

@lru_cache
def get_client() -> OpenAI:
    """OpenAI client (30s timeout)"""
    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=30.0
    )

def encode_image_to_data_url(image: bytes, mime_type: str) -> str:
    """Image bytes as a base64 data URL"""
    encoded = base64.b64encode(image).decode('utf-8')
    return f"data:{mime_type};base64,{encoded}"

def build_messages(raw_text: str, image: bytes | None = None, mime_type: str | None = None) -> list[dict]:
    user_content = [{"type": "text", "text": raw_text or "Tell the story of this photo."}]

    # only images go to the vision model
    if image and mime_type and mime_type.startswith("image/"):
        user_content.append({
            "type": "image_url",
            "image_url": {"url": encode_image_to_data_url(image, mime_type)}
        })

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_content}
    ]

@retry(
    stop=stop_after_attempt(2),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    retry=retry_if_exception_type((APITimeoutError, RateLimitError)),
    reraise=True
)
def _complete(messages: list[dict]) -> str | None:
    response = get_client().chat.completions.create(
        model=settings.openai_model,
        messages=messages,
        temperature=0.7,
        max_tokens=300
    )
    return response.choices[0].message.content

def rewrite_memory(raw_text: str, image: bytes | None = None, mime_type: str | None = None) -> str:
    """
    Rewrite a guest caption into a short story.
    Never raises: any failure returns raw_text unchanged.
    """
    raw_text = raw_text or ""

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set, keeping original caption")
        return raw_text

    if not raw_text and not image:
        return raw_text

    try:
        story = _complete(build_messages(raw_text, image, mime_type))
    except (APIError, APITimeoutError, RateLimitError) as e:
        logger.error(f"OpenAI API error: {e}")
        return raw_text
    except Exception as e:
        logger.error(f"AI rewriting failed: {e}")
        return raw_text

    return (story or "").strip() or raw_text
