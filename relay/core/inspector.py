"""Video origin lookup front-end."""

from rich.console import Console
from rich.markup import escape

from relay.core.client import create_client
from relay.core.config import RelayConfig
from relay.core.errors import describe_error
from relay.video.frames import extract_frame
from relay.video.origin import OriginFinder, OriginResult

console = Console()


class VideoInspector:
    """Extracts a frame from a video and reports where the video comes from."""

    def __init__(self, config: RelayConfig, finder: OriginFinder | None = None):
        self.config = config
        self._finder = finder

    @property
    def finder(self) -> OriginFinder:
        # Client creation needs the API key, so defer it until a lookup runs
        if self._finder is None:
            self._finder = OriginFinder(create_client(self.config.gemini), self.config.video)
        return self._finder

    def inspect(self, video_path: str, at: float | None = None, save_frame: str | None = None) -> OriginResult | None:
        """
        Look up the origin of a video and print the result.

        Args:
            video_path: Video file to analyze.
            at: Frame position in seconds; defaults to the middle of the video.
            save_frame: Optional path to write the extracted JPEG to.

        Returns:
            The result, or None if the lookup failed (the error is printed).
        """
        console.print(f"[cyan]🎬 Video Origin Finder: {video_path}")
        try:
            frame = extract_frame(video_path, at=at, jpeg_quality=self.config.video.jpeg_quality)
            console.print(
                f"[dim]Frame at {frame.timestamp_s:.2f}s ({frame.width}x{frame.height})[/dim]"
            )
            if save_frame:
                frame.save(save_frame)
                console.print(f"[dim]Frame saved to: {save_frame}[/dim]")

            with console.status("Analyzing... This may take a moment.", spinner="dots"):
                result = self.finder.analyze(frame)
        except Exception as exc:
            console.print(f"[red]{escape(describe_error(exc, 'analysis'))}")
            return None

        self._print_result(result)
        return result

    def _print_result(self, result: OriginResult) -> None:
        console.print("\n[bold]Analysis[/bold]")
        console.print(escape(result.text) if result.text else "[dim](no analysis text returned)[/dim]")
        if not result.sources:
            return
        console.print("\n[bold]Sources[/bold]")
        for source in result.sources:
            console.print(f"• [link={source.uri}]{escape(source.label)}[/link] [dim]{escape(source.uri)}[/dim]")
