"""Gapless playback of streamed model speech."""

import threading
from collections import deque

import numpy as np
import sounddevice as sd


class AudioPlayer:
    """Plays queued audio chunks back to back through the speakers.

    Chunks are appended from the event loop and drained by the output stream
    callback, so playback of one chunk never waits on the next one arriving.
    """

    def __init__(self, sample_rate: int = 24000, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels
        self._chunks: deque[np.ndarray] = deque()
        self._offset = 0  # samples of _chunks[0] already played
        self._lock = threading.Lock()
        self._stream: sd.OutputStream | None = None

    @property
    def pending_samples(self) -> int:
        with self._lock:
            return sum(len(c) for c in self._chunks) - self._offset

    def _ensure_stream(self) -> None:
        if self._stream is not None:
            return
        stream = sd.OutputStream(
            samplerate=self.sample_rate,
            dtype="float32",
            channels=self.channels,
            callback=self._audio_callback,
        )
        stream.start()
        self._stream = stream

    def _audio_callback(self, outdata: np.ndarray, frames: int, _time_info: object, _status: sd.CallbackFlags) -> None:
        """Fill the device buffer from queued chunks, padding with silence."""
        written = 0
        with self._lock:
            while written < frames and self._chunks:
                head = self._chunks[0]
                take = min(frames - written, len(head) - self._offset)
                outdata[written:written + take, 0] = head[self._offset:self._offset + take]
                written += take
                self._offset += take
                if self._offset >= len(head):
                    self._chunks.popleft()
                    self._offset = 0
        outdata[written:, 0] = 0.0
        if self.channels > 1:
            outdata[:, 1:] = outdata[:, :1]

    def enqueue(self, samples: np.ndarray) -> None:
        """
        Queue audio for playback after anything already queued.

        Args:
            samples: Mono float32 audio at the player's sample rate.
        """
        if len(samples) == 0:
            return
        with self._lock:
            self._chunks.append(np.asarray(samples, dtype=np.float32))
        self._ensure_stream()

    def interrupt(self) -> None:
        """Drop all queued audio, e.g. when the user talks over the model."""
        with self._lock:
            self._chunks.clear()
            self._offset = 0

    def close(self) -> None:
        """Stop playback and release the output device."""
        self.interrupt()
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.stop()
        finally:
            stream.close()
