from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..core.enums import AnnouncementTone
from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

ANNOUNCEMENT_NO_KEY = "Error: API Key missing."
ANNOUNCEMENT_FAILED = "Error generating content. Please check API key."
ANNOUNCEMENT_EMPTY = "Failed to generate announcement."

INSIGHTS_NO_KEY = "AI Insights unavailable (No API Key)."
INSIGHTS_FAILED = "Could not fetch insights."
INSIGHTS_EMPTY = "No insights available."


class GeminiClient:
    """Thin text-generation client for the Gemini REST API.

    Every public method returns a string. Missing keys, HTTP failures and
    malformed payloads map to fixed fallback messages, so callers never
    need to handle an exception from here.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-2.5-flash",
        timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self._api_key = (api_key or "").strip()
        self._model = model
        self._timeout = timeout
        self._http = http_client

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def generate_announcement(self, topic: str, tone: AnnouncementTone) -> str:
        if not self.enabled:
            logger.warning("GEMINI_API_KEY is not defined.")
            return ANNOUNCEMENT_NO_KEY

        try:
            tone = AnnouncementTone(tone)
        except ValueError:
            logger.warning("Unknown announcement tone %r", tone)
            return ANNOUNCEMENT_FAILED

        prompt = (
            f'Write a professional internal company announcement about: "{topic}". '
            f"The tone should be {tone.value}. Keep it concise (under 100 words)."
        )
        try:
            text = self._generate(prompt)
        except ExternalServiceError as e:
            logger.warning("Gemini API error: %s", e)
            return ANNOUNCEMENT_FAILED
        return text or ANNOUNCEMENT_EMPTY

    def get_dashboard_insights(self, attendance_stats: str, payroll_stats: str) -> str:
        if not self.enabled:
            logger.warning("GEMINI_API_KEY is not defined.")
            return INSIGHTS_NO_KEY

        prompt = (
            "You are an HR Analytics Assistant.\n"
            "Analyze this data summary in 2 sentences max.\n"
            f"Attendance Data: {attendance_stats}\n"
            f"Payroll Data: {payroll_stats}\n"
            "Provide a quick executive insight."
        )
        try:
            text = self._generate(prompt)
        except ExternalServiceError as e:
            logger.warning("Gemini API error: %s", e)
            return INSIGHTS_FAILED
        return text or INSIGHTS_EMPTY

    def _generate(self, prompt: str) -> str:
        """Returns the generated text, or "" when the model answered with nothing."""
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        url = GEMINI_ENDPOINT.format(model=self._model)

        try:
            if self._http is not None:
                response = self._http.post(url, params={"key": self._api_key}, json=payload, timeout=self._timeout)
            else:
                with httpx.Client() as client:
                    response = client.post(url, params={"key": self._api_key}, json=payload, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as http_err:
            raise ExternalServiceError(f"HTTP {http_err.response.status_code}: {http_err.response.text}") from http_err
        except (httpx.RequestError, ValueError) as e:
            raise ExternalServiceError(f"request failed: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return ""
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
