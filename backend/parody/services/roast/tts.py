"""ElevenLabs text-to-speech for roast narration."""

import base64
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

ELEVENLABS_BASE_URL = "https://api.elevenlabs.io/v1"
OUTPUT_FORMAT = "mp3_44100_128"
VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.5,
    "use_speaker_boost": True,
}
ERROR_BODY_PREVIEW_CHARS = 200


class SpeechError(Exception):
    """Text-to-speech request failed. The message never contains the API key."""


class ElevenLabsSpeaker:
    """Turns text into ``audio/mpeg`` bytes via the ElevenLabs API."""

    def __init__(
        self,
        api_key: str,
        *,
        voice_id: str,
        model_id: str = "eleven_multilingual_v2",
        base_url: str = ELEVENLABS_BASE_URL,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise ValueError("ELEVENLABS_API_KEY not configured")
        self._api_key = api_key
        self.voice_id = voice_id
        self.model_id = model_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def speak(self, text: str) -> bytes:
        """Synthesize *text*.

        Raises:
            SpeechError: On transport errors, non-success status, or an
                empty audio body.
        """
        if not text.strip():
            raise SpeechError("Nothing to narrate")

        url = f"{self.base_url}/text-to-speech/{self.voice_id}"
        payload = {
            "text": text,
            "model_id": self.model_id,
            "voice_settings": VOICE_SETTINGS,
        }
        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self._api_key,
        }
        try:
            if self._client is not None:
                response = await self._client.post(
                    url, json=payload, headers=headers, params={"output_format": OUTPUT_FORMAT}
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        url,
                        json=payload,
                        headers=headers,
                        params={"output_format": OUTPUT_FORMAT},
                    )
        except httpx.HTTPError as e:
            raise SpeechError(f"ElevenLabs request failed: {e.__class__.__name__}") from e

        if not response.is_success:
            raise SpeechError(
                f"ElevenLabs API failed: {response.status_code} - "
                f"{response.text[:ERROR_BODY_PREVIEW_CHARS]}"
            )
        if not response.content:
            raise SpeechError("ElevenLabs returned empty audio")

        logger.info(f"Generated {len(response.content) / 1024:.1f} KB of narration")
        return response.content


def audio_to_data_url(audio: bytes, mime_type: str = "audio/mpeg") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(audio).decode('ascii')}"
