"""
Journeys Admin Backend — LLM Interactions

Text completion and image generation via litellm.
One model per call site, no fallback chain and no retry: failures surface
to the caller, which reports them to the operator.
"""

import base64
import binascii
import time
import warnings

import litellm

from journeys_admin.config import LLM_CONFIG, generate_error_code, log, settings

warnings.filterwarnings("ignore", category=UserWarning, module="litellm")
litellm.suppress_debug_info = True
litellm.drop_params = True  # Prevent unsupported-param errors across providers


# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions
# ─────────────────────────────────────────────────────────────────────────────


class LLMError(Exception):
    """The text completion call failed."""

    pass


class ImageGenerationError(Exception):
    """The image model failed or returned no image payload."""

    pass


# ─────────────────────────────────────────────────────────────────────────────
# Core Functions
# ─────────────────────────────────────────────────────────────────────────────


async def call_llm(
    messages: list[dict],
    *,
    system_prompt: str,
    model: str,
    max_tokens: int | None = None,
    request_id: str | None = None,
) -> str:
    """
    Run a single text completion and return the first text block.

    Args:
        messages: Chat messages (without system prompt — injected here).
        system_prompt: Instruction sent as the system message.
        model: litellm model id, e.g. "anthropic/claude-sonnet-4-20250514".
        max_tokens: Output token cap. Defaults to LLM_CONFIG["max_tokens"].
        request_id: Optional ID for logging correlation.

    Returns:
        The response text, or "" when the model returned no text.

    Raises:
        LLMError: If the provider call fails.
    """
    full_messages = _inject_system_prompt(messages, system_prompt)
    log("INFO", "llm call started", request_id=request_id, model=model)
    start = time.perf_counter()

    try:
        response = await litellm.acompletion(
            model=model,
            messages=full_messages,
            max_tokens=max_tokens or LLM_CONFIG["max_tokens"],
            timeout=LLM_CONFIG["timeout"],
            api_key=settings.anthropic_api_key,
        )
    except Exception as e:
        code = generate_error_code()
        log("ERROR", "llm call failed", request_id=request_id, model=model, error=str(e), error_code=code)
        raise LLMError(str(e)) from e

    duration_ms = int((time.perf_counter() - start) * 1000)
    content = ""
    if response.choices:
        content = response.choices[0].message.content or ""

    tokens_used = None
    if hasattr(response, "usage") and response.usage:
        tokens_used = getattr(response.usage, "total_tokens", None)

    if not content:
        log("WARN", "llm returned empty content", request_id=request_id, model=model, duration_ms=duration_ms)
    else:
        log(
            "INFO",
            "llm call succeeded",
            request_id=request_id,
            model=model,
            duration_ms=duration_ms,
            tokens_used=tokens_used,
        )
    return content


async def generate_image(prompt: str, request_id: str | None = None) -> bytes:
    """
    Render an image for `prompt` and return the decoded bytes.

    Uses LLM_CONFIG["image"] (gpt-image-1, 1024x1024, transparent background).

    Raises:
        ImageGenerationError: On provider failure or when no base64 payload comes back.
    """
    image_config = LLM_CONFIG["image"]
    model = image_config["model"]
    log("INFO", "image generation started", request_id=request_id, model=model, prompt_length=len(prompt))
    start = time.perf_counter()

    try:
        result = await litellm.aimage_generation(
            model=model,
            prompt=prompt,
            size=image_config["size"],
            quality=image_config["quality"],
            background=image_config["background"],
            timeout=image_config["timeout"],
            api_key=settings.openai_api_key,
        )
    except Exception as e:
        code = generate_error_code()
        log("ERROR", "image generation failed", request_id=request_id, model=model, error=str(e), error_code=code)
        raise ImageGenerationError(str(e)) from e

    if not result:
        raise ImageGenerationError("No image was returned by the image model")

    data = getattr(result, "data", None) or []
    image_base64 = getattr(data[0], "b64_json", None) if data else None
    if not image_base64:
        raise ImageGenerationError("No image data was returned within the image model results")

    try:
        image_bytes = base64.b64decode(image_base64)
    except (binascii.Error, ValueError) as e:
        raise ImageGenerationError(f"Image payload is not valid base64: {e}") from e

    duration_ms = int((time.perf_counter() - start) * 1000)
    log(
        "INFO",
        "image generation succeeded",
        request_id=request_id,
        model=model,
        duration_ms=duration_ms,
        image_size_bytes=len(image_bytes),
    )
    return image_bytes


# ─────────────────────────────────────────────────────────────────────────────
# Helper Functions
# ─────────────────────────────────────────────────────────────────────────────


def _inject_system_prompt(messages: list[dict], system_prompt: str) -> list[dict]:
    """
    Prepend the system prompt to the message list.
    Returns a new list (does not mutate the input).
    """
    system_msg = {"role": "system", "content": system_prompt}
    return [system_msg] + list(messages)
