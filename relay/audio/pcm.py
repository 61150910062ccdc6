"""PCM16 framing between float32 sample arrays and the Gemini wire format."""

import base64

import numpy as np
from google.genai import types

_SCALE = 32768.0
_INT16 = np.dtype("<i2")


def float_to_pcm16(samples: np.ndarray) -> bytes:
    """
    Convert float32 samples to little-endian 16-bit PCM.

    Args:
        samples: Mono audio in [-1.0, 1.0]; values outside are clipped.

    Returns:
        Raw PCM16 bytes.
    """
    scaled = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0) * _SCALE
    return np.clip(scaled, -_SCALE, _SCALE - 1).astype(_INT16).tobytes()


def pcm16_to_float(data: bytes) -> np.ndarray:
    """
    Convert little-endian 16-bit PCM to float32 samples in [-1.0, 1.0).

    A trailing odd byte is ignored.
    """
    usable = len(data) - (len(data) % 2)
    pcm = np.frombuffer(data[:usable], dtype=_INT16)
    return pcm.astype(np.float32) / _SCALE


def encode_pcm16_base64(samples: np.ndarray) -> str:
    """Encode float32 samples as base64 PCM16 text."""
    return base64.b64encode(float_to_pcm16(samples)).decode("ascii")


def decode_pcm16_base64(text: str) -> np.ndarray:
    """Decode base64 PCM16 text to float32 samples."""
    return pcm16_to_float(base64.b64decode(text))


def create_blob(samples: np.ndarray, sample_rate: int = 16000) -> types.Blob:
    """Wrap float32 samples in a realtime-input blob for the live API."""
    return types.Blob(
        data=float_to_pcm16(samples),
        mime_type=f"audio/pcm;rate={sample_rate}",
    )


def decode_audio(data: bytes | str) -> np.ndarray:
    """
    Decode model audio to float32 samples.

    Args:
        data: Raw PCM16 bytes as delivered by the SDK, or base64 text.

    Returns:
        Float32 mono samples.
    """
    if isinstance(data, str):
        return decode_pcm16_base64(data)
    return pcm16_to_float(data)
