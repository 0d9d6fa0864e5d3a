"""
LLaMA API Service.

This module handles communication with the optional external generation
model used by POST /generate. It is responsible for:
1. Sending the description with a strict-JSON prompt
2. Extracting a JSON object from whatever text comes back
3. Normalizing it into a RenderSpec

Every call is a single attempt bounded by LLAMA_TIMEOUT. Callers are
expected to fall back to the heuristic parser on any LlamaServiceError.
"""

import json
import logging
import re
from typing import Any, Optional

import httpx

from memerender.config import Settings
from memerender.schemas.meme import RenderSpec
from memerender.services.description import parse_int

# Configure logging
logger = logging.getLogger(__name__)

# Keys used by common completion APIs to wrap the generated text
ENVELOPE_KEYS = ("reply", "generated_text", "output", "text", "completion")
SPEC_KEYS = ("templateId", "template_id", "top", "bottom", "width", "height")


class LlamaServiceError(Exception):
    """Base exception for LLaMA service errors."""
    pass


class LlamaConnectionError(LlamaServiceError):
    """Raised when the API is not configured or cannot be reached in time."""
    pass


class LlamaResponseError(LlamaServiceError):
    """Raised when the API returns an error status or no usable JSON object."""
    pass


class LlamaService:
    """
    Client for the external description-to-spec model.
    
    Settings are passed in explicitly; the service never reads the
    environment itself.
    """
    
    PROMPT = (
        "Produce a JSON object with fields: templateId (string), top (string), "
        "bottom (string), width (number), height (number). Respond with only valid JSON."
    )
    
    def __init__(self, settings: Settings):
        self.settings = settings
    
    @property
    def configured(self) -> bool:
        return self.settings.llama_configured
    
    def _get_auth_headers(self) -> dict[str, str]:
        """
        Get request headers based on configured auth type.
        
        - "bearer": Authorization: Bearer <LLAMA_API_KEY>
        - "api_key": x-api-key: <LLAMA_API_KEY>
        - "none": no authentication header
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        
        auth_type = self.settings.LLAMA_AUTH_TYPE.lower()
        api_key = self.settings.LLAMA_API_KEY
        
        if auth_type == "api_key" and api_key:
            headers["x-api-key"] = api_key
        elif auth_type == "none":
            pass
        elif api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        
        return headers
    
    def _build_prompt(self, description: str) -> str:
        return f"{self.PROMPT}\nDescription:\n{description}"
    
    def _build_request_payload(self, prompt: str) -> dict[str, Any]:
        return {"input": prompt, "max_tokens": 256}
    
    def _extract_json(self, text: str) -> Any:
        """
        Parse `text` as JSON, or failing that the outermost {...} span inside it.
        
        Raises:
            LlamaResponseError: If no valid JSON can be extracted
        """
        if not text or not text.strip():
            raise LlamaResponseError("Empty response from LLaMA")
        
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass
        
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except json.JSONDecodeError as e:
                logger.debug(f"Braced span found but failed to parse: {e}")
        
        raise LlamaResponseError(
            f"Could not extract valid JSON from LLaMA response: {text[:200]}"
        )
    
    def _unwrap_envelope(self, data: Any) -> Any:
        """
        Return the generated payload if `data` is a completion envelope
        ({"reply": "..."}, {"choices": [...]}, ...), otherwise `data` itself.
        """
        if not isinstance(data, dict) or any(key in data for key in SPEC_KEYS):
            return data
        
        generated: Any = None
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            choice = choices[0]
            message = choice.get("message")
            generated = message.get("content") if isinstance(message, dict) else choice.get("text")
        else:
            for key in ENVELOPE_KEYS:
                if key in data:
                    generated = data[key]
                    break
        
        if isinstance(generated, list) and generated:
            generated = generated[0]
        if isinstance(generated, dict):
            return generated
        if isinstance(generated, str):
            return self._extract_json(generated)
        return data
    
    def _normalize(self, data: dict[str, Any]) -> RenderSpec:
        max_len = self.settings.MAX_TEXT_LENGTH
        bg = data.get("bg")
        return RenderSpec(
            template_id=str(data.get("templateId") or data.get("template_id") or "gradient"),
            top=str(data.get("top") or "")[:max_len],
            bottom=str(data.get("bottom") or "")[:max_len],
            width=parse_int(data.get("width"), self.settings.DEFAULT_WIDTH),
            height=parse_int(data.get("height"), self.settings.DEFAULT_HEIGHT),
            bg=str(bg) if bg else None,
        )
    
    async def generate_render_spec(self, description: str) -> RenderSpec:
        """
        Ask the model to turn `description` into a RenderSpec.
        
        Args:
            description: Free-text meme description
            
        Returns:
            RenderSpec: Normalized spec built from the model's JSON
            
        Raises:
            LlamaConnectionError: If unconfigured, unreachable or timed out
            LlamaResponseError: If the response holds no JSON object
        """
        if not self.configured:
            raise LlamaConnectionError(
                "LLAMA_API_URL and LLAMA_API_KEY must both be configured."
            )
        
        payload = self._build_request_payload(self._build_prompt(description))
        
        logger.info(f"Calling LLaMA API at {self.settings.LLAMA_API_URL}")
        
        try:
            headers = self._get_auth_headers()
            async with httpx.AsyncClient(timeout=self.settings.LLAMA_TIMEOUT) as client:
                response = await client.post(
                    self.settings.LLAMA_API_URL,
                    headers=headers,
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise LlamaConnectionError(
                f"LLaMA API request timed out after {self.settings.LLAMA_TIMEOUT} seconds."
            ) from e
        except httpx.HTTPError as e:
            raise LlamaConnectionError(f"HTTP error calling LLaMA API: {e}") from e
        except Exception as e:
            raise LlamaConnectionError(f"Could not send LLaMA API request: {e!r}") from e
        
        if response.status_code != 200:
            raise LlamaResponseError(
                f"LLaMA API returned status {response.status_code}: {response.text[:200]}"
            )
        
        try:
            data = self._unwrap_envelope(self._extract_json(response.text))
            if not isinstance(data, dict):
                raise LlamaResponseError(
                    f"LLaMA response is not a JSON object: {type(data).__name__}"
                )
            spec = self._normalize(data)
        except LlamaServiceError:
            raise
        except Exception as e:
            raise LlamaResponseError(f"Could not parse LLaMA response: {e!r}") from e
        
        logger.info(f"LLaMA produced spec: template={spec.template_id}, {spec.width}x{spec.height}")
        return spec
