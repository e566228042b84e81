"""Tests for parody.services.roast.tts."""

import base64
import json

import httpx
import pytest

from parody.services.roast import ElevenLabsSpeaker, SpeechError, audio_to_data_url


def _speaker(handler) -> ElevenLabsSpeaker:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ElevenLabsSpeaker("xi-secret", voice_id="voice-1", client=client)


@pytest.mark.asyncio
class TestElevenLabsSpeaker:
    async def test_returns_audio_bytes(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"ID3audio")

        audio = await _speaker(handler).speak("You call that a portfolio?")

        assert audio == b"ID3audio"
        request = seen[0]
        assert request.url.path == "/v1/text-to-speech/voice-1"
        assert request.headers["xi-api-key"] == "xi-secret"
        body = json.loads(request.content)
        assert body["text"] == "You call that a portfolio?"
        assert body["model_id"] == "eleven_multilingual_v2"

    async def test_error_status_raises(self):
        speaker = _speaker(lambda r: httpx.Response(401, text="bad key"))
        with pytest.raises(SpeechError, match="401"):
            await speaker.speak("hello")

    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SpeechError, match="ReadTimeout"):
            await _speaker(handler).speak("hello")

    async def test_empty_text_rejected(self):
        with pytest.raises(SpeechError):
            await _speaker(lambda r: httpx.Response(200, content=b"x")).speak("  ")

    async def test_missing_key_rejected(self):
        with pytest.raises(ValueError):
            ElevenLabsSpeaker("", voice_id="v")


class TestAudioToDataUrl:
    def test_encodes_mpeg(self):
        url = audio_to_data_url(b"abc")
        assert url == "data:audio/mpeg;base64," + base64.b64encode(b"abc").decode()
