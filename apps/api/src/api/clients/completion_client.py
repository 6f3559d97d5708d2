from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from route_engine.errors import UpstreamUnavailable


class CompletionClient:
    """Chat-completion client for an OpenAI-compatible inference endpoint.

    Every transport problem is raised as :class:`UpstreamUnavailable` so callers
    have one error to react to. The answer text is returned untouched.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str | None = None,
        timeout_seconds: float = 15.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        body = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "stream": False,
            "temperature": 0,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.post(f"{self._base_url}/chat/completions", json=body, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable("completion service timed out", code="UPSTREAM_TIMEOUT") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(
                f"completion service returned {exc.response.status_code}",
                code="UPSTREAM_HTTP_ERROR",
            ) from exc
        except httpx.InvalidURL as exc:
            raise UpstreamUnavailable("completion service URL is invalid", code="UPSTREAM_INVALID_URL") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable("completion service request failed") from exc

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        try:
            payload: Any = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, str):
            return payload
        if not isinstance(payload, dict):
            return response.text
        choices = payload.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            content = (choices[0].get("message") or {}).get("content")
            if isinstance(content, str):
                return content
        # Workers AI style payloads carry the text under "response" or "result.response".
        result = payload.get("result")
        nested = result.get("response") if isinstance(result, dict) else None
        for candidate in (payload.get("response"), nested):
            if isinstance(candidate, str):
                return candidate
        return response.text
