"""Portfolio roast mode."""

from parody.services.roast.pipeline import RoastPipeline
from parody.services.roast.roast_writer import FALLBACK_ROAST, RoastWriter
from parody.services.roast.tts import ElevenLabsSpeaker, SpeechError, audio_to_data_url

__all__ = [
    "ElevenLabsSpeaker",
    "FALLBACK_ROAST",
    "RoastPipeline",
    "RoastWriter",
    "SpeechError",
    "audio_to_data_url",
]
