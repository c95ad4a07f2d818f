from __future__ import annotations  # Language-backend request gateway

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import httpx

from config import LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class BackendUnavailable(LlmGatewayError):  # Transport, status or credential failure
    pass


class EmptyResponse(LlmGatewayError):  # Success status without candidate text
    pass


class LlmClient:  # Stateless adapter bound to one route and its credential
    def __init__(
        self,
        route: LlmRoute,
        *,
        api_key: Optional[str] = None,
        client: Optional[HttpClient] = None,
    ) -> None:
        self.route = route
        self._api_key = api_key
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._api_key) or not self.route.api_key_env

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> str:  # Return first candidate text
        cfg = self.route
        if not self.configured:
            logger.error("LLM route %s has no credential (%s)", cfg.name, cfg.api_key_env)
            raise BackendUnavailable(f"{cfg.api_key_env} not configured")
        url, payload, headers = self._request(prompt, system_prompt)
        preview = _preview(prompt)
        logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, preview)
        try:
            response, close_cb = _post(url, payload, headers, cfg.timeout_s, self._client)
        except Exception as exc:  # noqa: BLE001
            logger.error("LLM transport failure: %s", exc)
            raise BackendUnavailable("LLM transport failed") from exc
        try:
            if response.status_code >= 400:
                logger.error("LLM error status: %s %s", response.status_code, _error_message(response))
                raise BackendUnavailable(f"LLM returned status {response.status_code}")
            try:
                data = response.json()
            except Exception as exc:  # noqa: BLE001
                logger.error("Invalid JSON payload from LLM: %s", exc)
                raise BackendUnavailable("LLM payload was not JSON") from exc
        finally:
            _close_safely(close_cb)
        text = _extract_text(cfg, data)
        if not text.strip():
            logger.warning("LLM response had no candidate text route=%s", cfg.name)
            raise EmptyResponse("LLM response missing content")
        logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(text))
        return text

    def _request(self, prompt: str, system_prompt: Optional[str]) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        cfg = self.route
        headers = {"Content-Type": "application/json"}
        if cfg.provider == "gemini":
            text = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt
            payload: Dict[str, Any] = {
                "contents": [{"parts": [{"text": text}]}],
                "generationConfig": {
                    "temperature": cfg.temperature,
                    "maxOutputTokens": cfg.max_output_tokens,
                },
            }
            if self._api_key:
                headers["x-goog-api-key"] = self._api_key
        else:
            messages: List[Dict[str, str]] = []
            if system_prompt:
                messages.append({"role": "system", "content": system_prompt})
            messages.append({"role": "user", "content": prompt})
            payload = {
                "model": cfg.model,
                "messages": messages,
                "temperature": cfg.temperature,
                "max_tokens": cfg.max_output_tokens,
            }
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
        headers.update(cfg.extra_headers)
        return f"{cfg.base_url}{cfg.endpoint}", payload, headers


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _preview(text: str) -> str:  # Build preview string for logging
    for line in text.strip().splitlines():
        if line.strip():
            line = line.strip()
            return line if len(line) <= 120 else line[:117] + "..."
    return ""


def _error_message(response: HttpResponse) -> str:  # Best-effort error detail from a failed response
    try:
        data = response.json()
    except Exception:  # noqa: BLE001
        return ""
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return str(data["error"].get("message", ""))
    return ""


def _extract_text(cfg: LlmRoute, data: Any) -> str:  # Extract first candidate text from either provider shape
    if not isinstance(data, dict):
        return ""
    if cfg.provider == "gemini":
        candidates = data.get("candidates")
        if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
            content = candidates[0].get("content")
            parts = content.get("parts") if isinstance(content, dict) else None
            if isinstance(parts, list) and parts and isinstance(parts[0], dict):
                text = parts[0].get("text")
                if isinstance(text, str):
                    return text
        return ""
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, str):
            return content
    return ""
