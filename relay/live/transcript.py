"""Running transcript of a live conversation."""

from dataclasses import dataclass
from pathlib import Path

SPEAKERS = ("user", "model")


@dataclass(frozen=True)
class TranscriptEntry:
    """One finished utterance."""

    speaker: str
    text: str


class Transcript:
    """Accumulates transcription fragments into per-turn entries.

    The live API streams transcriptions in small fragments for both sides of
    the conversation. Fragments are buffered per speaker until the server
    marks the turn complete.
    """

    def __init__(self):
        self._entries: list[TranscriptEntry] = []
        self._partials: dict[str, list[str]] = {s: [] for s in SPEAKERS}

    @property
    def entries(self) -> list[TranscriptEntry]:
        return list(self._entries)

    def _check_speaker(self, speaker: str) -> None:
        if speaker not in SPEAKERS:
            raise ValueError(f"Unknown speaker '{speaker}'. Expected one of {SPEAKERS}.")

    def append(self, speaker: str, text: str) -> None:
        """
        Add a transcription fragment.

        Args:
            speaker: "user" or "model".
            text: Fragment exactly as received; spacing is preserved.
        """
        self._check_speaker(speaker)
        if text:
            self._partials[speaker].append(text)

    def partial(self, speaker: str) -> str:
        """Return the in-progress text for a speaker."""
        self._check_speaker(speaker)
        return "".join(self._partials[speaker]).strip()

    def finish_turn(self) -> list[TranscriptEntry]:
        """
        Commit buffered fragments as entries.

        Returns:
            Entries added by this turn, user first.
        """
        finished = []
        for speaker in SPEAKERS:
            text = self.partial(speaker)
            self._partials[speaker].clear()
            if text:
                finished.append(TranscriptEntry(speaker, text))
        self._entries.extend(finished)
        return finished

    def clear(self) -> None:
        """Forget all entries and partial text."""
        self._entries.clear()
        for fragments in self._partials.values():
            fragments.clear()

    def to_text(self, names: dict[str, str] | None = None) -> str:
        """Render the transcript as "Name: text" lines."""
        names = names or {"user": "You", "model": "Model"}
        return "\n".join(f"{names.get(e.speaker, e.speaker)}: {e.text}" for e in self._entries)

    def save(self, path: str, names: dict[str, str] | None = None) -> None:
        """Write the rendered transcript to a text file."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.to_text(names) + "\n", encoding="utf-8")
