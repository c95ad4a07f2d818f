from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import BackendUnavailable, EmptyResponse, HttpClient, HttpResponse, LlmClient, LlmGatewayError

__all__ = ["BackendUnavailable", "EmptyResponse", "HttpClient", "HttpResponse", "LlmClient", "LlmGatewayError"]
