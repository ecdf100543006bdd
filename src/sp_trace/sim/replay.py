# sim/replay.py
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Literal

from sp_trace.domain.entities.geography import Graph, Node
from sp_trace.domain.entities.search import PathResult


@dataclass(frozen=True)
class Frame:
    index: int
    kind: Literal["explore", "path"]
    source: Node
    target: Node


def build_frames(graph: Graph, result: PathResult, *, include_path: bool = True) -> list[Frame]:
    frames = [
        Frame(i, "explore", graph.node(e.source_id), graph.node(e.target_id))
        for i, e in enumerate(result.trace)
    ]
    if include_path:
        for a, b in zip(result.path, result.path[1:]):
            frames.append(Frame(len(frames), "path", graph.node(a), graph.node(b)))
    return frames


class Replay:
    """
    Step-by-step playback of a finished search: every explored edge, then
    every path segment, one frame per tick.

    The caller owns the clock; ``tick`` is meant to be driven by a timer or a
    frame callback. Nothing is recomputed, and the result is only read.
    """

    def __init__(self, graph: Graph, result: PathResult, *, include_path: bool = True):
        self.frames = build_frames(graph, result, include_path=include_path)
        self._pos = 0
        self._cancelled = False

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def done(self) -> bool:
        return self._cancelled or self._pos >= len(self.frames)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def remaining(self) -> int:
        return 0 if self._cancelled else len(self.frames) - self._pos

    def tick(self) -> Frame | None:
        if self.done:
            return None
        f = self.frames[self._pos]
        self._pos += 1
        return f

    def cancel(self) -> None:
        self._cancelled = True

    def __iter__(self) -> Iterator[Frame]:
        while not self.done:
            yield self.tick()

    def schedule(self, delay_s: float, t0: float = 0.0) -> Iterable[tuple[float, Frame]]:
        """Yield (t, frame) with frame k due at t0 + (k + 1) * delay_s."""
        for f in self:
            yield (t0 + (f.index + 1) * delay_s, f)

    def frame_index_at(self, t: float, delay_s: float, t0: float = 0.0) -> int:
        """Number of frames that are due by time t on the same timeline as ``schedule``."""
        n = len(self.frames)
        if t <= t0:
            return 0
        if delay_s <= 0:
            return n
        # floor division drifts off by one at exact due times (0.03 // 0.01 == 2.0);
        # settle the estimate with the due-time expression ``schedule`` uses
        k = min(n, max(0, int((t - t0) // delay_s)))
        while k < n and t0 + (k + 1) * delay_s <= t:
            k += 1
        while k > 0 and t0 + k * delay_s > t:
            k -= 1
        return k
