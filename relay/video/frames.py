"""Still-frame extraction from video files."""

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

import cv2

from relay.core.errors import INVALID_VIDEO_MESSAGE, VideoError


@dataclass(frozen=True)
class Frame:
    """An encoded still image taken from a video."""

    data: bytes
    timestamp_s: float
    width: int
    height: int
    mime_type: str = "image/jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def save(self, path: str) -> None:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.data)


def is_video_file(path: str) -> bool:
    """Check the MIME type guessed from the file name."""
    mime_type, _ = mimetypes.guess_type(path)
    return bool(mime_type and mime_type.startswith("video/"))


def extract_frame(path: str, at: float | None = None, jpeg_quality: int = 95) -> Frame:
    """
    Grab a single frame from a video and encode it as JPEG.

    Args:
        path: Video file path.
        at: Position in seconds. Defaults to the middle of the video.
        jpeg_quality: JPEG quality (0-100).

    Returns:
        The encoded frame.

    Raises:
        VideoError: If the file is not a readable video or the frame cannot be decoded.
    """
    if not is_video_file(path):
        raise VideoError(INVALID_VIDEO_MESSAGE)
    if not Path(path).is_file():
        raise VideoError(f"Video file not found: {path}")

    cap = cv2.VideoCapture(path)
    try:
        if not cap.isOpened():
            raise VideoError(f"Could not open video: {path}")

        fps = cap.get(cv2.CAP_PROP_FPS) or 30
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        if frame_count <= 0:
            raise VideoError(f"Video has no frames: {path}")
        duration = frame_count / fps

        if at is None:
            index = frame_count // 2
        else:
            if at < 0 or at > duration:
                raise VideoError(
                    f"Timestamp {at:.2f}s is outside the video (duration {duration:.2f}s)."
                )
            index = min(int(at * fps), frame_count - 1)

        cap.set(cv2.CAP_PROP_POS_FRAMES, index)
        ok, image = cap.read()
        if not ok or image is None:
            raise VideoError(f"Failed to extract frame: could not decode frame {index}")

        ok, encoded = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, jpeg_quality])
        if not ok:
            raise VideoError("Failed to extract frame: JPEG encoding failed")
    finally:
        cap.release()

    height, width = image.shape[:2]
    return Frame(
        data=encoded.tobytes(),
        timestamp_s=index / fps,
        width=width,
        height=height,
    )
