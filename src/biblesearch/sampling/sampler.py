"""
Passage Sampler
===============

Random passage selection for the "verse of the moment" command.

Uses a numpy ``Generator`` so that a seed reproduces the same draw, which
keeps tests and scripted runs deterministic. Without a seed the generator
is seeded from OS entropy.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..corpus.loader import Corpus, Passage
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class PassageSampler:
    """Draws passages uniformly at random from a corpus."""

    def __init__(self, corpus: Corpus, seed: Optional[int] = None):
        if len(corpus) == 0:
            raise InvalidArgumentError("cannot sample from an empty corpus")
        self.corpus = corpus
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def choice(self) -> Passage:
        """One passage, uniformly at random."""
        index = int(self.rng.integers(0, len(self.corpus)))
        return self.corpus.passages[index]

    def sample(self, n: int = 1) -> list[Passage]:
        """
        Draw ``n`` distinct passages, in draw order.

        Asking for more passages than the corpus holds returns every
        passage in a random order.
        """
        if n <= 0:
            raise InvalidArgumentError(f"sample size must be a positive integer, got {n}")
        n_passages = len(self.corpus)
        if n > n_passages:
            logger.info(f"Requested {n} passages but corpus has {n_passages}; returning all")
            n = n_passages
        indices = self.rng.choice(n_passages, size=n, replace=False)
        return [self.corpus.passages[int(i)] for i in indices]


def random_passage(corpus: Corpus, seed: Optional[int] = None) -> Passage:
    """A single random passage from ``corpus``."""
    return PassageSampler(corpus, seed=seed).choice()
