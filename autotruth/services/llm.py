from typing import Any, Dict, List, Optional
import logging

import requests

from autotruth.config import GEMINI_API_BASE, GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TEMPERATURE, GEMINI_TIMEOUT
from autotruth.services.errors import ExternalCallError, ModelTransitionError, ThrottledError

logger = logging.getLogger(__name__)


def text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def inline_part(data: str, mime_type: str) -> Dict[str, Any]:
    """Inline binary part: base64 data plus its media type"""
    return {"inline_data": {"mime_type": mime_type, "data": data}}


class GeminiClient:
    """Thin wrapper around the Gemini generateContent REST endpoint"""

    def __init__(
        self,
        api_key: Optional[str],
        model_id: str = GEMINI_MODEL,
        api_base: str = GEMINI_API_BASE,
        timeout: int = GEMINI_TIMEOUT,
        temperature: float = GEMINI_TEMPERATURE,
    ):
        self.api_key = api_key
        self.model_id = model_id
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.temperature = temperature

    def generate_content(self, parts: List[Dict[str, Any]]) -> str:
        """
        Send one ordered list of parts and return the reply text

        Args:
            parts: Content parts, e.g. [text_part(prompt), inline_part(b64, "image/png")]

        Returns:
            Concatenated text of the first candidate
        """
        if not self.api_key:
            raise ExternalCallError("GEMINI_API_KEY environment variable is not set")

        url = f"{self.api_base}/models/{self.model_id}:generateContent"
        payload = {
            "contents": [{"parts": parts}],
            "generationConfig": {"temperature": self.temperature},
        }

        try:
            resp = requests.post(
                url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ExternalCallError(f"Gemini API request failed: {e}") from e

        if not resp.ok:
            raise _classify_http_error(resp)

        try:
            data = resp.json()
        except ValueError as e:
            raise ExternalCallError(f"Gemini API returned a non-JSON body: {e}") from e

        return _candidate_text(data)


def _classify_http_error(resp: requests.Response) -> ExternalCallError:
    """Map a failed Gemini HTTP reply to the tagged error closest to its cause"""
    message = ""
    status = ""
    try:
        err = resp.json().get("error", {})
        message = err.get("message") or ""
        status = err.get("status") or ""
    except (ValueError, AttributeError):
        message = resp.text or ""

    detail = f"Gemini API error {resp.status_code}: {message or resp.reason}"
    lowered = message.lower()

    if resp.status_code == 429 or status == "RESOURCE_EXHAUSTED" or "rate limit" in lowered:
        return ThrottledError(detail)
    if "deprecated" in lowered or "no longer available" in lowered:
        return ModelTransitionError(detail)
    return ExternalCallError(detail)


def _candidate_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        reason = (data.get("promptFeedback") or {}).get("blockReason")
        if reason:
            raise ExternalCallError(f"Gemini blocked the request: {reason}")
        raise ExternalCallError("No response generated from Gemini")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text.strip():
        finish = candidates[0].get("finishReason", "UNKNOWN")
        raise ExternalCallError(f"Gemini returned an empty response (finishReason={finish})")
    return text


def build_gemini_client() -> GeminiClient:
    return GeminiClient(api_key=GEMINI_API_KEY)
