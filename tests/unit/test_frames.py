"""Unit tests for relay.video.frames."""

import base64

import cv2
import numpy as np
import pytest
from unittest.mock import MagicMock, patch

from relay.core.errors import VideoError
from relay.video.frames import Frame, extract_frame, is_video_file


def _gray_level(frame: Frame) -> float:
    image = cv2.imdecode(np.frombuffer(frame.data, dtype=np.uint8), cv2.IMREAD_GRAYSCALE)
    return float(image.mean())


class TestIsVideoFile:
    @pytest.mark.parametrize("name", ["clip.mp4", "clip.avi", "CLIP.MOV", "dir/clip.mpeg"])
    def test_video_names(self, name):
        assert is_video_file(name)

    @pytest.mark.parametrize("name", ["photo.jpg", "notes.txt", "noext"])
    def test_non_video_names(self, name):
        assert not is_video_file(name)


class TestExtractFrame:
    def test_defaults_to_middle_frame(self, tiny_video):
        frame = extract_frame(str(tiny_video))

        assert frame.mime_type == "image/jpeg"
        assert frame.data[:2] == b"\xff\xd8"
        assert (frame.width, frame.height) == (64, 48)
        assert frame.timestamp_s == pytest.approx(1.0)
        # frame 10 of 20 was written with gray level 100
        assert _gray_level(frame) == pytest.approx(100, abs=4)

    def test_explicit_timestamp(self, tiny_video):
        frame = extract_frame(str(tiny_video), at=0.5)
        assert frame.timestamp_s == pytest.approx(0.5)
        assert _gray_level(frame) == pytest.approx(50, abs=4)

    def test_timestamp_out_of_range(self, tiny_video):
        with pytest.raises(VideoError, match="outside the video"):
            extract_frame(str(tiny_video), at=30.0)

    def test_negative_timestamp(self, tiny_video):
        with pytest.raises(VideoError, match="outside the video"):
            extract_frame(str(tiny_video), at=-1.0)

    def test_rejects_non_video(self, tmp_path):
        path = tmp_path / "photo.jpg"
        path.write_bytes(b"not a video")
        with pytest.raises(VideoError, match="Please upload a valid video file."):
            extract_frame(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(VideoError, match="not found"):
            extract_frame(str(tmp_path / "gone.mp4"))

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "broken.mp4"
        path.write_bytes(b"\x00" * 64)
        with pytest.raises(VideoError):
            extract_frame(str(path))

    def test_decode_failure_releases_capture(self, tmp_path):
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"stub")
        cap = MagicMock()
        cap.isOpened.return_value = True
        cap.get.side_effect = lambda prop: 25.0 if prop == cv2.CAP_PROP_FPS else 50
        cap.read.return_value = (False, None)

        with patch("relay.video.frames.cv2.VideoCapture", return_value=cap):
            with pytest.raises(VideoError, match="Failed to extract frame"):
                extract_frame(str(path))

        cap.set.assert_called_once_with(cv2.CAP_PROP_POS_FRAMES, 25)
        cap.release.assert_called_once()


class TestFrame:
    def test_to_base64(self):
        frame = Frame(data=b"\xff\xd8abc", timestamp_s=0.0, width=1, height=1)
        assert base64.b64decode(frame.to_base64()) == b"\xff\xd8abc"

    def test_save(self, tmp_path):
        frame = Frame(data=b"jpeg", timestamp_s=0.0, width=1, height=1)
        out = tmp_path / "frames" / "mid.jpg"
        frame.save(str(out))
        assert out.read_bytes() == b"jpeg"
