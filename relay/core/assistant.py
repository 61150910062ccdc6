"""Live voice conversation orchestrator."""

import asyncio
import os
import threading

import numpy as np
import soundfile as sf
from google import genai
from google.genai import types
from rich.console import Console
from rich.markup import escape

from relay.audio.pcm import decode_audio
from relay.audio.player import AudioPlayer
from relay.audio.recorder import AudioRecorder
from relay.core.client import create_client
from relay.core.config import RelayConfig
from relay.core.errors import MicrophoneError, describe_error
from relay.live.session import LiveSession
from relay.live.transcript import Transcript

console = Console()

QUIT_COMMANDS = ("q", "quit", "exit")
RESET_COMMANDS = ("r", "reset")


class LiveAssistant:
    """Streams the microphone to a live model and speaks its replies."""

    def __init__(self, config: RelayConfig, client: genai.Client | None = None):
        """
        Initialize the live assistant.

        Args:
            config: Full Relay configuration.
            client: Gemini client; created from config when omitted.
        """
        self.config = config
        self.status = ""
        self.error = ""

        console.print(f"[cyan]🎙  {config.assistant_name} Live")
        console.print("[cyan]━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")

        self.client = client if client is not None else create_client(config.gemini)

        audio = config.audio
        self.recorder = AudioRecorder(
            sample_rate=audio.input_sample_rate,
            channels=audio.channels,
            blocksize=audio.blocksize,
        )
        self.player = AudioPlayer(sample_rate=audio.output_sample_rate)
        self.transcript = Transcript()
        self.session = self._new_session()

        self._stream_task: asyncio.Task[None] | None = None
        self._saved_audio: list[np.ndarray] = []

        self._print_config()

    def _print_config(self) -> None:
        """Print current configuration."""
        console.print(f"[blue]Model: {self.config.live.model}")
        console.print(f"[blue]Voice: {self.config.live.voice}")
        console.print(f"[blue]Personality: {self.config.personality.name}")
        console.print("[cyan]━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
        console.print("[cyan]Enter: start/stop recording · r: reset session · q: quit\n")

    def _new_session(self) -> LiveSession:
        return LiveSession(
            self.client,
            self.config.live,
            self.config.personality,
            input_sample_rate=self.config.audio.input_sample_rate,
            on_open=self._on_open,
            on_message=self.handle_message,
            on_error=self._on_error,
            on_close=self._on_close,
        )

    # --- status -------------------------------------------------------------

    def _set_status(self, message: str) -> None:
        self.status = message
        self.error = ""
        console.print(f"[green]{message}")

    def _set_error(self, message: str) -> None:
        self.error = message
        console.print(f"[red]Error: {escape(message)}")

    def _on_open(self) -> None:
        self._set_status("Session opened")

    def _on_error(self, exc: BaseException) -> None:
        self._set_error(describe_error(exc, "the session"))

    def _on_close(self, reason: str) -> None:
        self.status = f"Session closed: {reason}"
        console.print(f"[dim]{escape(self.status)}[/dim]")

    # --- server messages ----------------------------------------------------

    def handle_message(self, message: types.LiveServerMessage) -> None:
        """
        Route one server message to playback and the transcript.

        Args:
            message: Message received from the live session.
        """
        content = message.server_content
        if content is None:
            return

        if content.interrupted:
            self.player.interrupt()
            console.print("[dim](interrupted)[/dim]")

        if content.input_transcription and content.input_transcription.text:
            self.transcript.append("user", content.input_transcription.text)
        if content.output_transcription and content.output_transcription.text:
            self.transcript.append("model", content.output_transcription.text)

        if content.model_turn and content.model_turn.parts:
            for part in content.model_turn.parts:
                if part.inline_data is None or not part.inline_data.data:
                    continue
                audio = decode_audio(part.inline_data.data)
                self.player.enqueue(audio)
                if self.config.live.save_audio:
                    self._saved_audio.append(audio)

        if content.turn_complete:
            for entry in self.transcript.finish_turn():
                if entry.speaker == "user":
                    console.print(f"[yellow]You: {escape(entry.text)}")
                else:
                    console.print(f"[cyan]{self.config.assistant_name}: {escape(entry.text)}")

    # --- recording ----------------------------------------------------------

    async def start_recording(self) -> None:
        """Open the microphone and stream it to the session."""
        if self.recorder.is_recording:
            return

        if not self.session.is_open:
            try:
                await self.session.connect()
            except Exception:
                return  # already reported through on_error

        try:
            queue = self.recorder.start(asyncio.get_running_loop())
        except MicrophoneError as e:
            self._set_error(str(e))
            return

        self._stream_task = asyncio.create_task(self._stream_microphone(queue))
        self._set_status("🔴 Recording... streaming microphone audio.")

    async def _stream_microphone(self, queue: asyncio.Queue[np.ndarray]) -> None:
        """Forward microphone chunks to the session until cancelled."""
        try:
            while True:
                chunk = await queue.get()
                await self.session.send_audio(chunk)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.recorder.stop()
            if not self.session.is_open:
                # server ended the session; on_close already reported why
                self._set_status("Recording stopped. Press Enter to start again.")
            else:
                self._set_error(describe_error(exc, "the session"))

    async def stop_recording(self) -> None:
        """Tear down the microphone stream. The session stays open."""
        task, self._stream_task = self._stream_task, None
        if task is None and not self.recorder.is_recording:
            return

        self.recorder.stop()
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._set_status("Recording stopped. Press Enter to start again.")

    async def toggle_recording(self) -> None:
        if self.recorder.is_recording:
            await self.stop_recording()
        else:
            await self.start_recording()

    async def reset(self) -> None:
        """Close the session, forget the conversation and reconnect."""
        await self.stop_recording()
        await self.session.close()
        self.player.interrupt()
        self.transcript.clear()
        self.session = self._new_session()
        try:
            await self.session.connect()
        except Exception:
            return  # already reported through on_error
        self._set_status("Session cleared.")

    async def shutdown(self) -> None:
        """Release the microphone, the session and the speakers."""
        try:
            await self.stop_recording()
        finally:
            try:
                await self.session.close()
            finally:
                try:
                    self.player.close()
                finally:
                    self._save_outputs()

    def _save_outputs(self) -> None:
        live = self.config.live
        if live.save_audio and self._saved_audio:
            directory = os.path.dirname(live.save_audio)
            if directory:
                os.makedirs(directory, exist_ok=True)
            sf.write(live.save_audio, np.concatenate(self._saved_audio), self.config.audio.output_sample_rate)
            console.print(f"[dim]Voice saved to: {live.save_audio}[/dim]")
        if live.transcript_path and self.transcript.entries:
            self.transcript.save(
                live.transcript_path,
                names={"user": "You", "model": self.config.assistant_name},
            )
            console.print(f"[dim]Transcript saved to: {live.transcript_path}[/dim]")

    # --- main loop ----------------------------------------------------------

    def _read_commands(self, loop: asyncio.AbstractEventLoop, commands: asyncio.Queue[str]) -> None:
        """Read console lines on a daemon thread so Ctrl+C never waits on input()."""
        while True:
            try:
                line = console.input()
            except EOFError:
                line = QUIT_COMMANDS[0]
            loop.call_soon_threadsafe(commands.put_nowait, line)
            if line.strip().lower() in QUIT_COMMANDS:
                return

    async def dispatch(self, command: str) -> bool:
        """
        Handle one console command.

        Returns:
            False when the user asked to quit.
        """
        command = command.strip().lower()
        if command in QUIT_COMMANDS:
            return False
        if command in RESET_COMMANDS:
            await self.reset()
        elif command == "":
            await self.toggle_recording()
        else:
            console.print("[dim]Enter: start/stop recording · r: reset session · q: quit[/dim]")
        return True

    async def _run(self) -> int:
        try:
            await self.session.connect()
        except Exception:
            return 1

        loop = asyncio.get_running_loop()
        commands: asyncio.Queue[str] = asyncio.Queue()
        reader = threading.Thread(target=self._read_commands, args=(loop, commands), daemon=True)
        reader.start()

        try:
            while await self.dispatch(await commands.get()):
                pass
        finally:
            await self.shutdown()
        return 0

    def run(self) -> int:
        """
        Run the interactive session.

        Returns:
            Process exit status.
        """
        status = 0
        try:
            status = asyncio.run(self._run())
        except KeyboardInterrupt:
            console.print("\n[red]Exiting...")

        console.print(f"[blue]Session ended. Thank you for using {self.config.assistant_name}!")
        return status
