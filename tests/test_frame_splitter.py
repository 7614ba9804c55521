"""Tests for incremental frame splitting."""

import pytest

from streaming import ChunkDecodeError, FrameSplitter

STREAM = (
    "event: message_start\ndata: {\"type\":\"message_start\"}\n\n"
    "data: {\"choices\":[{\"delta\":{\"content\":\"héllo\"}}]}\n\n"
    ": keepalive\n\n"
    "data: [DONE]\n\n"
).encode("utf-8")


def _feed_all(splitter: FrameSplitter, pieces) -> list:
    frames = []
    for piece in pieces:
        frames.extend(splitter.append(piece))
    return frames


class TestSplitting:
    def test_whole_stream_yields_trimmed_frames(self):
        frames = list(FrameSplitter().append(STREAM))
        assert frames == [
            "event: message_start\ndata: {\"type\":\"message_start\"}",
            "data: {\"choices\":[{\"delta\":{\"content\":\"héllo\"}}]}",
            ": keepalive",
            "data: [DONE]",
        ]

    def test_any_single_cut_point_gives_same_frames(self):
        expected = list(FrameSplitter().append(STREAM))
        for cut in range(len(STREAM) + 1):
            splitter = FrameSplitter()
            assert _feed_all(splitter, [STREAM[:cut], STREAM[cut:]]) == expected, cut

    def test_byte_at_a_time_gives_same_frames(self):
        expected = list(FrameSplitter().append(STREAM))
        pieces = [STREAM[i:i + 1] for i in range(len(STREAM))]
        assert _feed_all(FrameSplitter(), pieces) == expected

    def test_boundary_split_across_appends(self):
        splitter = FrameSplitter()
        assert list(splitter.append(b"data: a\n")) == []
        assert list(splitter.append(b"\ndata: b")) == ["data: a"]
        assert splitter.pending == "data: b"

    def test_partial_frame_is_retained(self):
        splitter = FrameSplitter()
        assert list(splitter.append(b"data: one\n\ndata: tw")) == ["data: one"]
        assert splitter.pending == "data: tw"
        assert list(splitter.append(b"o\n\n")) == ["data: two"]
        assert splitter.pending == ""

    def test_frames_not_pulled_stay_buffered(self):
        splitter = FrameSplitter()
        frames = splitter.append(b"data: 1\n\ndata: 2\n\n")
        assert next(frames) == "data: 1"
        # Abandon the iterator; the second frame is still buffered
        assert list(splitter.append(b"")) == ["data: 2"]

    @pytest.mark.parametrize("threshold", [0, 1, 16, 8192])
    def test_compaction_threshold_does_not_change_output(self, threshold):
        expected = list(FrameSplitter().append(STREAM))
        pieces = [STREAM[i:i + 7] for i in range(0, len(STREAM), 7)]
        assert _feed_all(FrameSplitter(compact_threshold=threshold), pieces) == expected


class TestDecoding:
    def test_multibyte_character_split_across_chunks(self):
        encoded = "data: é\n\n".encode("utf-8")
        split = encoded.index(b"\xa9")  # second byte of "é"
        splitter = FrameSplitter()
        assert list(splitter.append(encoded[:split])) == []
        assert list(splitter.append(encoded[split:])) == ["data: é"]

    def test_invalid_chunk_raises_and_is_dropped(self):
        splitter = FrameSplitter()
        assert list(splitter.append(b"data: ok\n\n")) == ["data: ok"]
        with pytest.raises(ChunkDecodeError, match="UTF-8"):
            splitter.append(b"\xff\xfe")
        assert list(splitter.append(b"data: next\n\n")) == ["data: next"]

    def test_reset_returns_pending_text(self):
        splitter = FrameSplitter()
        list(splitter.append(b"data: tail"))
        assert splitter.reset() == "data: tail"
        assert splitter.pending == ""
