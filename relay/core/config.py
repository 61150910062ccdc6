"""Configuration loading and dataclasses for Relay."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_PROMPT = (
    "Analyze this video frame and find the original video or information "
    "about it on the web."
)


@dataclass
class GeminiConfig:
    """Gemini API credentials."""

    api_key: str | None = None  # Takes precedence over the environment
    api_key_env: str = "GEMINI_API_KEY"


@dataclass
class AudioConfig:
    """Microphone capture and speaker playback configuration."""

    input_sample_rate: int = 16000
    output_sample_rate: int = 24000
    channels: int = 1
    blocksize: int = 1024  # samples per microphone chunk sent to the model


@dataclass
class LiveConfig:
    """Live conversation configuration."""

    model: str = "gemini-2.5-flash-native-audio-preview-09-2025"
    voice: str = "Orus"
    save_audio: str | None = None  # WAV path for the model's speech
    transcript_path: str | None = None


@dataclass
class VideoConfig:
    """Video origin lookup configuration."""

    model: str = "gemini-2.5-flash"
    prompt: str = DEFAULT_PROMPT
    jpeg_quality: int = 95


@dataclass
class PersonalityConfig:
    """System instruction for the live session."""

    name: str = "Relay"
    system_prompt: str = "You are a friendly, concise voice assistant."


@dataclass
class RelayConfig:
    """Top-level configuration for Relay."""

    assistant_name: str = "Relay"
    personality_name: str = "relay"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    live: LiveConfig = field(default_factory=LiveConfig)
    video: VideoConfig = field(default_factory=VideoConfig)
    personality: PersonalityConfig = field(default_factory=PersonalityConfig)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_personality(config_dir: Path, personality_name: str) -> PersonalityConfig:
    """Load personality configuration from file."""
    personality_path = config_dir / "personalities" / f"{personality_name}.yaml"

    if not personality_path.exists():
        print(f"Warning: Personality file not found: {personality_path}")
        return PersonalityConfig()

    data = _load_yaml(personality_path)
    defaults = PersonalityConfig()

    return PersonalityConfig(
        name=data.get("name", defaults.name),
        system_prompt=data.get("system_prompt", defaults.system_prompt),
    )


def load_config(config_path: str = "config/default.yaml") -> RelayConfig:
    """
    Load Relay configuration from YAML file.

    Args:
        config_path: Path to the main configuration file.

    Returns:
        RelayConfig with all settings loaded.
    """
    config_file = Path(config_path)

    if not config_file.exists():
        print(f"Warning: Config file not found: {config_path}, using defaults")
        return RelayConfig()

    data = _load_yaml(config_file)
    config_dir = config_file.parent

    # Parse assistant section
    assistant_data = data.get("assistant", {})
    assistant_name = assistant_data.get("name", "Relay")
    personality_name = assistant_data.get("personality", "relay")

    # Parse gemini section
    gemini_data = data.get("gemini", {})
    gemini_config = GeminiConfig(
        api_key=gemini_data.get("api_key"),
        api_key_env=gemini_data.get("api_key_env", "GEMINI_API_KEY"),
    )

    # Parse audio section
    audio_data = data.get("audio", {})
    audio_config = AudioConfig(
        input_sample_rate=audio_data.get("input_sample_rate", 16000),
        output_sample_rate=audio_data.get("output_sample_rate", 24000),
        channels=audio_data.get("channels", 1),
        blocksize=audio_data.get("blocksize", 1024),
    )

    # Parse live section
    live_data = data.get("live", {})
    live_defaults = LiveConfig()
    live_config = LiveConfig(
        model=live_data.get("model", live_defaults.model),
        voice=live_data.get("voice", live_defaults.voice),
        save_audio=live_data.get("save_audio"),
        transcript_path=live_data.get("transcript_path"),
    )

    # Parse video section
    video_data = data.get("video", {})
    video_config = VideoConfig(
        model=video_data.get("model", "gemini-2.5-flash"),
        prompt=video_data.get("prompt", DEFAULT_PROMPT),
        jpeg_quality=video_data.get("jpeg_quality", 95),
    )

    personality_config = load_personality(config_dir, personality_name)

    return RelayConfig(
        assistant_name=assistant_name,
        personality_name=personality_name,
        gemini=gemini_config,
        audio=audio_config,
        live=live_config,
        video=video_config,
        personality=personality_config,
    )
