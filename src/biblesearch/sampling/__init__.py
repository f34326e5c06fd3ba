"""Random passage selection."""

from .sampler import PassageSampler, random_passage

__all__ = ["PassageSampler", "random_passage"]
