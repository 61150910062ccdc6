"""Microphone capture for live sessions."""

from __future__ import annotations

import asyncio

import numpy as np
import sounddevice as sd
from rich.console import Console

from relay.core.errors import MICROPHONE_MESSAGE, MicrophoneError

console = Console()


class AudioRecorder:
    """Streams microphone audio into an asyncio queue."""

    def __init__(self, sample_rate: int = 16000, channels: int = 1, blocksize: int = 1024):
        """
        Initialize the audio recorder.

        Args:
            sample_rate: Audio sample rate in Hz.
            channels: Number of audio channels.
            blocksize: Samples per chunk delivered to the queue.
        """
        self.sample_rate = sample_rate
        self.channels = channels
        self.blocksize = blocksize
        self._stream: sd.InputStream | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[np.ndarray] | None = None

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def _audio_callback(self, indata: np.ndarray, _frames: int, _time_info: object, status: sd.CallbackFlags) -> None:
        """Callback for audio stream — runs on the PortAudio thread."""
        if status:
            console.print(f"[yellow]Audio status: {status}[/yellow]")
        loop, queue = self._loop, self._queue
        if loop is None or queue is None:
            return
        chunk = indata[:, 0].copy() if indata.ndim > 1 else indata.copy().flatten()
        loop.call_soon_threadsafe(queue.put_nowait, chunk.astype(np.float32))

    def start(self, loop: asyncio.AbstractEventLoop) -> asyncio.Queue[np.ndarray]:
        """
        Open the microphone and start streaming.

        Args:
            loop: Event loop that consumes the chunks.

        Returns:
            Queue receiving mono float32 chunks.

        Raises:
            MicrophoneError: If the input device cannot be opened.
        """
        if self._stream is not None and self._queue is not None:
            return self._queue

        self._loop = loop
        self._queue = asyncio.Queue()
        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                dtype="float32",
                channels=self.channels,
                blocksize=self.blocksize,
                callback=self._audio_callback,
            )
            try:
                stream.start()
            except (sd.PortAudioError, OSError):
                stream.close()
                raise
        except (sd.PortAudioError, OSError) as e:
            self._loop = None
            self._queue = None
            raise MicrophoneError(MICROPHONE_MESSAGE) from e

        self._stream = stream
        return self._queue

    def stop(self) -> None:
        """Stop the microphone stream."""
        stream, self._stream = self._stream, None
        self._loop = None
        if stream is None:
            return
        try:
            stream.stop()
        finally:
            stream.close()
