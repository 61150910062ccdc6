"""Live module - Streaming voice sessions."""

# Use: from relay.live.session import LiveSession
# Use: from relay.live.transcript import Transcript
