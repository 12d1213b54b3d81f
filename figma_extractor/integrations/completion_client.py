"""LLM completion API client.

Sends a single text prompt to a chat-completion provider and returns the
model's free-form text. Provider credentials and endpoints are resolved once
into a ProviderConfig; the client never reads the environment itself.

Providers:
- github: GitHub Models (Azure inference, OpenAI-compatible)
- openai: OpenAI chat completions
- anthropic: Anthropic messages API
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from figma_extractor import settings
from figma_extractor.errors import ExternalAPIError, ValidationError

logger = logging.getLogger("figma_extractor.integrations.completion")

SYSTEM_PROMPT = "You are an expert frontend developer specialized in converting designs to code."

ANTHROPIC_VERSION = "2023-06-01"

# provider → (api_url, key env var, model env var, default model)
PROVIDERS: Dict[str, tuple] = {
    "github": (
        "https://models.inference.ai.azure.com/chat/completions",
        "GITHUB_TOKEN",
        "GITHUB_MODEL",
        "gpt-4o",
    ),
    "openai": (
        "https://api.openai.com/v1/chat/completions",
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "gpt-4o",
    ),
    "anthropic": (
        "https://api.anthropic.com/v1/messages",
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_MODEL",
        "claude-3-5-sonnet-20241022",
    ),
}


def validate_provider(provider: Optional[str]) -> str:
    """Return the provider name, defaulting to github."""
    if provider and provider not in PROVIDERS:
        raise ValidationError(
            f"Invalid AI provider. Must be one of: {', '.join(PROVIDERS)}"
        )
    return provider or "github"


def _error_detail(resp: httpx.Response) -> str:
    """Best-effort error message from a provider error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500]
    if not isinstance(body, dict):
        return resp.text[:500]
    err = body.get("error")
    if isinstance(err, dict):
        err = err.get("message")
    return err or body.get("message") or resp.text[:500]


@dataclass(frozen=True)
class ProviderConfig:
    """Resolved settings for one completion provider."""

    provider: str
    api_url: str
    api_key: str
    model: str
    temperature: float = settings.LLM_TEMPERATURE
    max_tokens: int = settings.LLM_MAX_TOKENS
    timeout: float = settings.LLM_HTTP_TIMEOUT

    @classmethod
    def from_env(
        cls,
        provider: str = "github",
        env: Optional[Mapping[str, str]] = None,
        api_key: Optional[str] = None,
    ) -> "ProviderConfig":
        """Build a config from an environment mapping.

        Args:
            provider: One of github, openai, anthropic.
            env: Mapping to read keys/models from (defaults to os.environ).
            api_key: Explicit key, overrides the one in ``env``.

        Raises:
            ValidationError: unknown provider or no API key available.
        """
        env = os.environ if env is None else env
        if provider not in PROVIDERS:
            raise ValidationError(f"Unsupported AI provider: {provider}")
        api_url, key_var, model_var, default_model = PROVIDERS[provider]
        key = api_key or env.get(key_var, "")
        if not key:
            raise ValidationError(
                f"API key not configured for provider: {provider}",
                details=f"Set {key_var} in environment variables",
            )
        return cls(
            provider=provider,
            api_url=api_url,
            api_key=key,
            model=env.get(model_var) or default_model,
        )


class CompletionClient:
    """Async client for one completion provider."""

    def __init__(self, provider_config: ProviderConfig):
        self.config = provider_config

    @property
    def provider(self) -> str:
        return self.config.provider

    def _build_request(self, prompt: str) -> tuple:
        """Return (headers, payload) for the configured provider."""
        cfg = self.config
        if cfg.provider == "anthropic":
            headers = {
                "Content-Type": "application/json",
                "x-api-key": cfg.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            }
            payload: Dict[str, Any] = {
                "model": cfg.model,
                "max_tokens": cfg.max_tokens,
                "messages": [{"role": "user", "content": prompt}],
            }
        else:
            headers = {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {cfg.api_key}",
            }
            payload = {
                "model": cfg.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": cfg.temperature,
                "max_tokens": cfg.max_tokens,
            }
        return headers, payload

    @staticmethod
    def _extract_text(provider: str, data: Dict[str, Any]) -> str:
        try:
            if provider == "anthropic":
                return data["content"][0]["text"]
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalAPIError(
                f"Unexpected {provider} completion response shape",
                details=str(e),
            ) from e

    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` and return the completion text."""
        headers, payload = self._build_request(prompt)
        logger.info(
            f"complete: provider={self.provider}, model={self.config.model}, "
            f"prompt_chars={len(prompt)}"
        )
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                resp = await client.post(self.config.api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise ExternalAPIError(
                f"{self.provider} completion API timeout", status_code=504
            ) from e
        except httpx.TransportError as e:
            raise ExternalAPIError(f"{self.provider} completion API unreachable: {e}") from e

        if resp.status_code >= 400:
            detail = _error_detail(resp)
            raise ExternalAPIError(
                f"{self.provider} completion API error {resp.status_code}",
                status_code=502,
                details=detail,
            )

        return self._extract_text(self.provider, resp.json())
