"""Unit tests for relay.audio.pcm."""

import base64

import numpy as np

from relay.audio.pcm import (
    create_blob,
    decode_audio,
    decode_pcm16_base64,
    encode_pcm16_base64,
    float_to_pcm16,
    pcm16_to_float,
)


class TestFloatToPcm16:
    def test_known_values(self):
        data = float_to_pcm16(np.array([0.0, 0.5, -0.5, -1.0], dtype=np.float32))
        assert np.frombuffer(data, dtype="<i2").tolist() == [0, 16384, -16384, -32768]

    def test_full_scale_positive_clamps_to_int16_max(self):
        data = float_to_pcm16(np.array([1.0], dtype=np.float32))
        assert np.frombuffer(data, dtype="<i2").tolist() == [32767]

    def test_out_of_range_is_clipped(self):
        data = float_to_pcm16(np.array([3.0, -7.0], dtype=np.float32))
        assert np.frombuffer(data, dtype="<i2").tolist() == [32767, -32768]

    def test_two_bytes_per_sample(self, sample_audio):
        assert len(float_to_pcm16(sample_audio)) == 2 * len(sample_audio)

    def test_empty(self):
        assert float_to_pcm16(np.array([], dtype=np.float32)) == b""


class TestPcm16ToFloat:
    def test_known_values(self):
        data = np.array([0, 16384, -32768], dtype="<i2").tobytes()
        np.testing.assert_array_equal(pcm16_to_float(data), [0.0, 0.5, -1.0])

    def test_returns_float32(self):
        assert pcm16_to_float(b"\x00\x01").dtype == np.float32

    def test_odd_trailing_byte_dropped(self):
        data = np.array([100, 200], dtype="<i2").tobytes() + b"\x07"
        assert len(pcm16_to_float(data)) == 2


class TestLosslessAtSixteenBits:
    def test_every_int16_value_survives(self):
        original = np.arange(-32768, 32768, dtype="<i2")
        samples = pcm16_to_float(original.tobytes())
        assert float_to_pcm16(samples) == original.tobytes()

    def test_base64_text_path(self):
        original = np.array([-32768, -1, 0, 1, 12345, 32767], dtype="<i2")
        text = base64.b64encode(original.tobytes()).decode("ascii")
        assert encode_pcm16_base64(decode_pcm16_base64(text)) == text


class TestCreateBlob:
    def test_mime_type_includes_rate(self, sample_audio):
        blob = create_blob(sample_audio, 16000)
        assert blob.mime_type == "audio/pcm;rate=16000"
        assert blob.data == float_to_pcm16(sample_audio)


class TestDecodeAudio:
    def test_bytes(self):
        data = np.array([16384], dtype="<i2").tobytes()
        np.testing.assert_array_equal(decode_audio(data), [0.5])

    def test_base64_string(self):
        text = base64.b64encode(np.array([-16384], dtype="<i2").tobytes()).decode("ascii")
        np.testing.assert_array_equal(decode_audio(text), [-0.5])
