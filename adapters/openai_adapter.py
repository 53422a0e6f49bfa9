"""OpenAI chat-completion adapter with retry and rate-limit backoff.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import httpx

from app.config import settings
from app.exceptions import AIServiceError

logger = logging.getLogger("lechef.openai")


class ChatCompletionClient:
    """Thin wrapper around the chat completions endpoint.

    Every call asks for a JSON object response. Failed calls are retried
    up to ``max_retries`` times; a 429 waits twice as long as any other
    failure before the next attempt.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = settings.openai_api_key if api_key is None else api_key
        self.api_url = api_url or settings.openai_api_url
        self.model = model or settings.openai_model
        self.temperature = settings.ai_temperature if temperature is None else temperature
        self.max_retries = settings.ai_max_retries if max_retries is None else max_retries
        self.retry_delay = settings.ai_retry_delay_sec if retry_delay is None else retry_delay
        self.timeout = timeout or settings.ai_timeout_sec
        self._transport = transport
        self._sleep = sleep

    def _client(self) -> httpx.Client:
        return httpx.Client(
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    def payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one system + user message pair and return the first choice's content.

        Raises:
            AIServiceError: missing API key, or every attempt failed
        """
        if not self.api_key:
            raise AIServiceError("OPENAI_API_KEY environment variable is not set")

        data = self.payload(system_prompt, user_prompt)
        last_error: Optional[str] = None

        with self._client() as client:
            for attempt in range(self.max_retries):
                is_last = attempt == self.max_retries - 1
                try:
                    resp = client.post(self.api_url, json=data)

                    if resp.status_code == 429 and not is_last:
                        wait = self.retry_delay * (attempt + 1) * 2
                        logger.warning(
                            "OpenAI rate limit hit (attempt %d/%d), retrying in %.1fs",
                            attempt + 1, self.max_retries, wait,
                        )
                        last_error = "Rate limit exceeded"
                        self._sleep(wait)
                        continue

                    if resp.status_code != 200:
                        raise AIServiceError(
                            f"OpenAI API error: {resp.status_code} {resp.text}"
                        )

                    body = resp.json()
                    content = (
                        (body.get("choices") or [{}])[0].get("message", {}).get("content")
                    )
                    if not content:
                        raise AIServiceError("No content in OpenAI response")

                    logger.debug("OpenAI call succeeded on attempt %d", attempt + 1)
                    return content

                except (AIServiceError, httpx.HTTPError, ValueError) as e:
                    last_error = str(e)
                    logger.warning(
                        "OpenAI call failed (attempt %d/%d): %s",
                        attempt + 1, self.max_retries, last_error,
                    )
                    if not is_last:
                        self._sleep(self.retry_delay * (attempt + 1))

        raise AIServiceError(
            f"Failed to call OpenAI API after {self.max_retries} attempts: "
            f"{last_error or 'Unknown error'}"
        )


_default_client: Optional[ChatCompletionClient] = None


def get_chat_client() -> ChatCompletionClient:
    """Process-wide client built from settings."""
    global _default_client
    if _default_client is None:
        _default_client = ChatCompletionClient()
    return _default_client


def set_chat_client(client: Optional[ChatCompletionClient]) -> None:
    """Replace the process-wide client (tests install one backed by a mock transport)."""
    global _default_client
    _default_client = client
