import logging
from typing import Any, Dict, List, Optional

import requests

from agents.errors import ResponseTypeError, TransportError
from llm_config import LLM_API_KEY, LLM_TEMPERATURE, LLM_TIMEOUT

logger = logging.getLogger(__name__)


class OpenAIStyleClient:
    """Low-level HTTP client for OpenAI-style /v1/chat/completions."""

    def __init__(
        self,
        base_url: str,
        model_name: str,
        api_key: Optional[str] = LLM_API_KEY,
        timeout: Optional[float] = LLM_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.api_key = api_key
        self.timeout = timeout

    def chat(self, messages: List[Dict[str, str]], **kwargs: Any) -> Any:
        """
        Send one chat-completions request and return the first choice's
        message content as the server sent it (a string or a list of parts).
        """
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload: Dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "temperature": kwargs.get("temperature", LLM_TEMPERATURE),
            "max_tokens": kwargs.get("max_tokens", 4096),
            "stream": False,
        }

        url = self.base_url + "/v1/chat/completions"
        try:
            resp = requests.post(url, headers=headers, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        try:
            data = resp.json()
        except ValueError as e:
            raise ResponseTypeError(f"Completion endpoint returned non-JSON body: {e}") from e

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ResponseTypeError(f"Unexpected completion envelope: {e!r}") from e


def extract_text(content: Any) -> str:
    """
    Return the text of a single text-typed content part.

    Plain string content counts as one text part; a list of parts must start
    with a part of type "text".
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list) and content:
        part = content[0]
        if isinstance(part, dict) and part.get("type") == "text" and isinstance(part.get("text"), str):
            return part["text"]
        part_type = part.get("type") if isinstance(part, dict) else type(part).__name__
        raise ResponseTypeError(f"Unexpected response type from model: {part_type}")
    raise ResponseTypeError(f"Unexpected response type from model: {type(content).__name__}")
