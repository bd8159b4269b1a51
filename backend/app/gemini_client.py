from __future__ import annotations
import httpx
from typing import Any, Dict, List, Optional
from .settings import settings


class GeminiConfigError(ValueError):
	pass


class GeminiError(RuntimeError):
	pass


class GeminiClient:
	def __init__(self, api_key: Optional[str] = None, *, base_url: Optional[str] = None, model: Optional[str] = None) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise GeminiConfigError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		# Google AI Studio (Generative Language API); key travels in the query string
		self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
		self._client = httpx.AsyncClient(timeout=settings.gemini_timeout_seconds)

	async def __aenter__(self) -> "GeminiClient":
		return self

	async def __aexit__(self, *exc_info: Any) -> None:
		await self.aclose()

	async def generate(self, prompt: str, *, generation_config: Optional[Dict[str, Any]] = None) -> str:
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
		if generation_config:
			payload["generationConfig"] = generation_config
		url = f"{self.base_url}/models/{self.model}:generateContent"
		try:
			r = await self._client.post(url, params={"key": self.api_key}, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise GeminiError(f"Gemini returned HTTP {http_err.response.status_code}: {http_err.response.text}") from http_err
		except httpx.RequestError as net_err:
			raise GeminiError(f"Gemini request failed: {net_err}") from net_err
		try:
			data = r.json()
			return data["candidates"][0]["content"]["parts"][0]["text"]
		except Exception as err:
			raise GeminiError(f"Unexpected Gemini response: {r.text}") from err

	async def list_models(self) -> List[str]:
		"""Names of the models that support generateContent."""
		try:
			r = await self._client.get(f"{self.base_url}/models", params={"key": self.api_key})
			r.raise_for_status()
			data = r.json()
		except httpx.HTTPStatusError as http_err:
			raise GeminiError(f"Gemini returned HTTP {http_err.response.status_code}: {http_err.response.text}") from http_err
		except (httpx.RequestError, ValueError) as err:
			raise GeminiError(f"Gemini model listing failed: {err}") from err
		return [
			m["name"]
			for m in data.get("models", [])
			if "generateContent" in (m.get("supportedGenerationMethods") or [])
		]

	async def aclose(self) -> None:
		await self._client.aclose()
