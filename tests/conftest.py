"""Shared test fixtures for Relay test suite."""

from types import SimpleNamespace

import numpy as np
import pytest


@pytest.fixture
def default_config():
    """RelayConfig with all defaults."""
    from relay.core.config import RelayConfig

    return RelayConfig()


@pytest.fixture
def sample_audio() -> np.ndarray:
    """0.1-second float32 audio at 16kHz (440Hz tone)."""
    t = np.linspace(0, 0.1, 1600, dtype=np.float32)
    return 0.5 * np.sin(2 * np.pi * 440 * t)


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory with personalities/ subdirectory."""
    personalities_dir = tmp_path / "personalities"
    personalities_dir.mkdir()
    return tmp_path


@pytest.fixture
def tiny_video(tmp_path):
    """Write a 20-frame MJPG .avi whose frame i is filled with gray level i * 10."""
    import cv2

    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (64, 48))
    for i in range(20):
        writer.write(np.full((48, 64, 3), i * 10, dtype=np.uint8))
    writer.release()
    return path


@pytest.fixture
def server_message():
    """Factory for objects shaped like a LiveServerMessage."""
    return _server_message


def _server_message(
    *,
    audio: bytes | None = None,
    user_text: str | None = None,
    model_text: str | None = None,
    interrupted: bool = False,
    turn_complete: bool = False,
):
    """Build an object shaped like a LiveServerMessage."""
    parts = []
    if audio is not None:
        parts.append(SimpleNamespace(inline_data=SimpleNamespace(data=audio, mime_type="audio/pcm;rate=24000")))
    content = SimpleNamespace(
        interrupted=interrupted,
        turn_complete=turn_complete,
        input_transcription=SimpleNamespace(text=user_text) if user_text is not None else None,
        output_transcription=SimpleNamespace(text=model_text) if model_text is not None else None,
        model_turn=SimpleNamespace(parts=parts) if parts else None,
    )
    return SimpleNamespace(server_content=content)
