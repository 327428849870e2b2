"""Advice provider HTTP client (OpenAI-compatible chat completions)"""

import httpx
from giving_ledger.domain.exceptions import ProviderUnavailable
from giving_ledger.config import settings

SYSTEM_PROMPT = "You are a helpful financial advisor focused on ethical finance and charitable giving."


class HttpAdviceProvider:
    """Client for an external text-generation API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        model: str = "gpt-4o-mini",
    ):
        self.base_url = base_url or settings.advice_api_base
        self.api_key = api_key or settings.advice_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.model = model

    async def generate(self, prompt: str) -> str:
        """
        Send one prompt and return the generated text.

        Raises:
            ProviderUnavailable: On missing credentials, timeout, HTTP errors, or invalid response
        """
        if not self.api_key:
            raise ProviderUnavailable("Advice provider API key not configured")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/v1/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "model": self.model,
                        "messages": [
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt},
                        ],
                        "temperature": 0.7,
                        "max_tokens": 500,
                    },
                )
                response.raise_for_status()
                return response.json()["choices"][0]["message"]["content"]

            except httpx.TimeoutException as e:
                raise ProviderUnavailable(f"Advice provider timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProviderUnavailable(f"Advice provider error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProviderUnavailable(f"Advice provider unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                raise ProviderUnavailable(f"Invalid response from advice provider: {e}") from e
