"""Audio module - Microphone capture, playback and PCM framing."""

# Lazy imports to avoid loading numpy/sounddevice on module load
# Use: from relay.audio.recorder import AudioRecorder
# Use: from relay.audio.player import AudioPlayer
