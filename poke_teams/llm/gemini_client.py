"""Thin wrapper around Google's Generative AI Gemini client."""

from __future__ import annotations

import os
from typing import Optional

import google.generativeai as genai


class GeminiClient:
    """Convenience client for single-shot Gemini text prompts."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
    ) -> None:
        api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured")
        genai.configure(api_key=api_key)
        self.model_name = model
        self.model = genai.GenerativeModel(model)

    def generate(self, prompt: str) -> str:
        """Send one prompt and return the raw text of the reply."""

        response = self.model.generate_content(prompt)
        return response.text.strip() if response and response.text else ""
