"""
Client for the text-generation endpoint.

generate_text(prompt) -> raw model text. Two providers, chosen by
settings.LLM_PROVIDER:
  - "openai": Chat Completions through the openai SDK
  - "ollama": a hosted Llama-style endpoint, POST {LLM_BASE_URL}/api/generate

Every failure (transport, non-200, empty output, missing key) surfaces as
GenerationError so callers have one thing to catch.
"""

import logging
from functools import lru_cache
from typing import Optional

import requests
from django.conf import settings
from openai import OpenAI, OpenAIError

from .extraction import extract_json_object
from .prompts import SYSTEM_PROMPT, customization_prompt, recipe_prompt

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The generation endpoint failed or returned nothing usable."""

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response


@lru_cache(maxsize=4)
def _openai_client(api_key: str, timeout: float) -> OpenAI:
    return OpenAI(api_key=api_key, timeout=timeout)


def _openai_generate(prompt: str, system: Optional[str]) -> str:
    api_key = getattr(settings, "OPENAI_API_KEY", None)
    if not api_key:
        raise GenerationError("OpenAI API key not configured.")

    client = _openai_client(api_key, float(getattr(settings, "LLM_TIMEOUT", 60)))
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    try:
        c = client.chat.completions.create(
            model=getattr(settings, "OPENAI_TEXT_MODEL", "gpt-4o-mini"),
            messages=messages,
            temperature=0.7,
        )
    except OpenAIError as e:
        logger.warning("OpenAI request failed: %s", e)
        raise GenerationError(f"OpenAI request failed: {e}") from e

    return (c.choices[0].message.content or "").strip()


def _ollama_generate(prompt: str, system: Optional[str]) -> str:
    base_url = getattr(settings, "LLM_BASE_URL", "http://localhost:11434").rstrip("/")
    body = {
        "model": getattr(settings, "LLM_MODEL", "llama3"),
        "prompt": prompt,
        "stream": False,
    }
    if system:
        body["system"] = system

    try:
        r = requests.post(
            f"{base_url}/api/generate",
            json=body,
            timeout=float(getattr(settings, "LLM_TIMEOUT", 60)),
        )
    except requests.RequestException as e:
        logger.warning("Generation endpoint unreachable: %s", e)
        raise GenerationError(f"Generation endpoint unreachable: {e}") from e

    if r.status_code != 200:
        logger.error("Generation endpoint %s: %s", r.status_code, r.text)
        raise GenerationError(f"Generation endpoint returned {r.status_code}.")

    try:
        data = r.json() or {}
    except ValueError as e:
        raise GenerationError("Generation endpoint returned invalid JSON.", r.text) from e
    return str(data.get("response") or "").strip()


_PROVIDERS = {
    "openai": _openai_generate,
    "ollama": _ollama_generate,
}


def generate_text(prompt: str, system: Optional[str] = SYSTEM_PROMPT) -> str:
    """Send `prompt` to the configured provider and return its raw text."""
    provider = (getattr(settings, "LLM_PROVIDER", "openai") or "openai").lower()
    generate = _PROVIDERS.get(provider)
    if generate is None:
        raise GenerationError(f"Unknown LLM provider: {provider!r}")

    text = generate(prompt, system)
    if not text:
        raise GenerationError("Generation endpoint returned an empty response.")
    return text


def generate_recipe(kind: str, name: str, customizations: Optional[list[str]] = None) -> dict:
    """
    Ask for a full recipe structure.

    kind="any"    -> a recipe for `name`
    kind="custom" -> `name` reworked with `customizations`

    Returns the parsed JSON object exactly as the model produced it (no
    defaulting). Raises GenerationError if no object can be recovered.
    """
    if kind == "custom":
        prompt = customization_prompt(name, customizations or [])
    else:
        prompt = recipe_prompt(name)

    text = generate_text(prompt)
    data = extract_json_object(text)
    if data is None:
        logger.warning("Could not parse a recipe for %r from model output.", name)
        raise GenerationError("Could not parse a recipe from the model output.", text)
    return data
