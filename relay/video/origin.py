"""Find where a video comes from using Gemini with Google Search grounding."""

from dataclasses import dataclass, field

from google import genai
from google.genai import types

from relay.core.config import VideoConfig
from relay.video.frames import Frame, extract_frame


@dataclass(frozen=True)
class Source:
    """A web page the model cited."""

    title: str
    uri: str

    @property
    def label(self) -> str:
        return self.title or self.uri


@dataclass
class OriginResult:
    """Analysis text and the web sources it was grounded on."""

    text: str
    sources: list[Source] = field(default_factory=list)


def extract_sources(response: types.GenerateContentResponse) -> list[Source]:
    """
    Collect web grounding chunks from the first candidate.

    Chunks without a web entry are skipped, as are repeated URIs.
    """
    if not response.candidates:
        return []
    metadata = response.candidates[0].grounding_metadata
    if metadata is None or not metadata.grounding_chunks:
        return []

    sources: list[Source] = []
    seen: set[str] = set()
    for chunk in metadata.grounding_chunks:
        web = chunk.web
        if web is None or not web.uri or web.uri in seen:
            continue
        seen.add(web.uri)
        sources.append(Source(title=web.title or "", uri=web.uri))
    return sources


class OriginFinder:
    """Asks the model to identify a video from one of its frames."""

    def __init__(self, client: genai.Client, config: VideoConfig):
        """
        Initialize the origin finder.

        Args:
            client: Gemini client.
            config: Video configuration (model, prompt, JPEG quality).
        """
        self.client = client
        self.config = config

    def analyze(self, frame: Frame) -> OriginResult:
        """
        Send a frame to the model with the Google Search tool enabled.

        Args:
            frame: Encoded still image.

        Returns:
            The model's analysis and its grounding sources.
        """
        response = self.client.models.generate_content(
            model=self.config.model,
            contents=[
                types.Part.from_bytes(data=frame.data, mime_type=frame.mime_type),
                types.Part.from_text(text=self.config.prompt),
            ],
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            ),
        )
        return OriginResult(text=response.text or "", sources=extract_sources(response))

    def find_origin(self, path: str, at: float | None = None) -> OriginResult:
        """Extract a frame from the video at *path* and analyze it."""
        frame = extract_frame(path, at=at, jpeg_quality=self.config.jpeg_quality)
        return self.analyze(frame)
