"""Wrapper around a Gemini Live connection with open/message/error/close callbacks."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

import numpy as np
from google import genai
from google.genai import types

from relay.audio.pcm import create_blob
from relay.core.config import LiveConfig, PersonalityConfig


def build_connect_config(config: LiveConfig, personality: PersonalityConfig) -> types.LiveConnectConfig:
    """Build the live connection config: spoken replies plus transcripts of both sides."""
    return types.LiveConnectConfig(
        response_modalities=[types.Modality.AUDIO],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=config.voice),
            ),
        ),
        system_instruction=types.Content(parts=[types.Part(text=personality.system_prompt)]),
        input_audio_transcription=types.AudioTranscriptionConfig(),
        output_audio_transcription=types.AudioTranscriptionConfig(),
    )


class LiveSession:
    """A single streaming audio session with the live model.

    The SDK only exposes the live API through asyncio, so every method here is
    a coroutine. Server messages are delivered to ``on_message`` from a
    background receive task.
    """

    def __init__(
        self,
        client: genai.Client,
        config: LiveConfig,
        personality: PersonalityConfig,
        *,
        input_sample_rate: int = 16000,
        on_open: Callable[[], None] = lambda: None,
        on_message: Callable[[types.LiveServerMessage], None] = lambda message: None,
        on_error: Callable[[BaseException], None] = lambda exc: None,
        on_close: Callable[[str], None] = lambda reason: None,
    ):
        self._client = client
        self._config = config
        self._personality = personality
        self._input_sample_rate = input_sample_rate
        self._on_open = on_open
        self._on_message = on_message
        self._on_error = on_error
        self._on_close = on_close
        self._context: AbstractAsyncContextManager[Any] | None = None
        self._session: Any = None
        self._receive_task: asyncio.Task[None] | None = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def connect(self) -> None:
        """
        Open the connection and start receiving.

        Raises:
            Exception: Whatever the SDK raised while connecting, after on_error.
        """
        if self._session is not None:
            return
        if self._context is not None:
            # the previous connection ended on the server side
            await self.close()

        context = self._client.aio.live.connect(
            model=self._config.model,
            config=build_connect_config(self._config, self._personality),
        )
        try:
            self._session = await context.__aenter__()
        except Exception as exc:
            self._on_error(exc)
            raise

        self._context = context
        self._on_open()
        self._receive_task = asyncio.create_task(self._receive_loop())

    async def _receive_loop(self) -> None:
        """Deliver server messages until the connection ends."""
        reason = "connection closed"
        try:
            while self._session is not None:
                received = False
                # receive() yields one turn at a time
                async for message in self._session.receive():
                    received = True
                    self._on_message(message)
                if not received:
                    reason = "server ended the session"
                    break
        except asyncio.CancelledError:
            reason = "session closed by user"
            raise
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._on_error(exc)
        finally:
            self._session = None
            self._on_close(reason)

    async def send_audio(self, samples: np.ndarray) -> None:
        """
        Stream one microphone chunk to the model.

        Args:
            samples: Mono float32 audio at the input sample rate.

        Raises:
            RuntimeError: If the session is not connected.
        """
        if self._session is None:
            raise RuntimeError("Live session is not connected. Call connect() first.")
        await self._session.send_realtime_input(
            audio=create_blob(samples, self._input_sample_rate),
        )

    async def close(self) -> None:
        """Stop receiving and close the connection."""
        task, self._receive_task = self._receive_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        context, self._context = self._context, None
        self._session = None
        if context is None:
            return
        try:
            await context.__aexit__(None, None, None)
        except Exception as exc:
            self._on_error(exc)
