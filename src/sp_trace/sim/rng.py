# sim/rng.py
from functools import cache
from zlib import crc32

import numpy as np


def _word(p: object) -> int:
    """One 32-bit entropy word: ints are masked, anything else is hashed by crc32."""
    if isinstance(p, (int, np.integer)):
        return int(p) & 0xFFFFFFFF
    return crc32((p if isinstance(p, str) else repr(p)).encode("utf-8"))


class RNGRegistry:
    """
    Named numpy.random.Generator streams for graph generation.

    A stream is seeded from [seed, scenario, name, *keys], so it depends only
    on its own name and keys: "nodes" for a 500-node graph and "nodes" for a
    50-node graph are unrelated, and asking for one never shifts the other.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = master_seed
        self.scenario = scenario
        self._root = (_word(master_seed), _word(str(scenario)))

    @cache
    def stream(self, name: str, *keys: object) -> np.random.Generator:
        entropy = [*self._root, _word(name), *(_word(k) for k in keys)]
        return np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))
