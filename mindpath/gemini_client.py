"""Gemini REST client used for the behavioral assessment call."""
import json
import logging
import os
from typing import Any, Dict, Optional

import requests

from mindpath.config import DEFAULT_MODEL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiClient:
    """Client for the Gemini `generateContent` endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: int = DEFAULT_TIMEOUT,
        base_url: str = BASE_URL,
    ):
        """Initialize client with API key from environment or parameter."""
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY must be set in environment or passed to constructor")

        self.base_url = base_url
        self.default_model = model
        self.timeout = timeout

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        response_format: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Generate content using Gemini API.

        Args:
            prompt: The input text prompt
            model: Model name (defaults to the client's model)
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens in response
            response_format: 'json' for JSON mode, None for text
            response_schema: Structured-output schema (implies JSON mode)
            timeout: Request timeout in seconds

        Returns:
            Dict with 'ok', 'text', 'raw', 'error' keys
        """
        model = model or self.default_model
        timeout = timeout or self.timeout
        url = f"{self.base_url}/{model}:generateContent"

        generation_config: Dict[str, Any] = {"temperature": temperature}
        if max_tokens:
            generation_config["maxOutputTokens"] = max_tokens
        if response_format == "json" or response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
        if response_schema is not None:
            generation_config["responseSchema"] = response_schema

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=timeout,
            )
        except requests.exceptions.Timeout:
            logger.warning("Gemini request to %s timed out after %ss", model, timeout)
            return {"ok": False, "text": None, "raw": None,
                    "error": f"Request timed out after {timeout} seconds"}
        except requests.exceptions.RequestException as e:
            logger.warning("Gemini request to %s failed: %s", model, e)
            return {"ok": False, "text": None, "raw": None, "error": f"Request failed: {e}"}

        if response.status_code != 200:
            logger.warning("Gemini returned HTTP %s for %s", response.status_code, model)
            return {
                "ok": False,
                "text": None,
                "raw": None,
                "error": f"HTTP {response.status_code}: {response.text[:500]}",
            }

        try:
            data = response.json()
        except ValueError as e:
            return {"ok": False, "text": None, "raw": response.text,
                    "error": f"Response body is not JSON: {e}"}

        return {"ok": True, "text": self._extract_text(data), "raw": data, "error": None}

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        """Extract text content from API response."""
        if not isinstance(data, dict):
            return None
        candidates = data.get("candidates") or []
        if not candidates or not isinstance(candidates[0], dict):
            return None

        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return None

        # Combine all text parts
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))

    def generate_json(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Generate JSON response using Gemini.

        Returns:
            Dict with 'ok', 'data' (parsed JSON), 'raw', 'error' keys
        """
        result = self.generate(
            prompt=prompt,
            model=model,
            response_format="json",
            response_schema=response_schema,
            temperature=0.3,  # Lower temp for structured output
            timeout=timeout,
        )

        if not result["ok"]:
            return {"ok": False, "data": None, "raw": result["raw"], "error": result["error"]}

        text = result["text"]
        if not text:
            return {"ok": False, "data": None, "raw": result["raw"], "error": "Empty response from API"}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            return {"ok": False, "data": None, "raw": result["raw"],
                    "error": f"Failed to parse JSON: {e}"}

        return {"ok": True, "data": data, "raw": result["raw"], "error": None}
