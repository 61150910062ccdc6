"""Relay - terminal front-ends for the Gemini API."""
