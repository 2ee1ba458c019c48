"""
Unbiased Commit Sampling Module.

Selects commits uniformly at random, without replacement, using a Fisher-Yates
shuffle driven by the operating system's cryptographically strong random source.
"""

import secrets
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")


class CommitSampler:
    """
    Draws uniform random samples from a population of commit identifiers.

    Attributes:
        randbelow (Callable[[int], int]): Returns a uniform integer in [0, n).
    """

    def __init__(self, randbelow: Callable[[int], int] = secrets.randbelow):
        self.randbelow = randbelow

    def sample_indices(self, population_size: int, k: int) -> List[int]:
        """
        Pick ``min(k, population_size)`` distinct indices from ``[0, population_size)``.

        Every subset of that size is equally likely. The order of the returned
        indices carries no ranking.

        Args:
            population_size (int): Size of the population
            k (int): Requested sample size

        Returns:
            List[int]: Selected indices
        """
        if population_size < 0 or k < 0:
            raise ValueError("population size and sample size must be non-negative")

        indices = list(range(population_size))
        for i in range(population_size - 1, 0, -1):
            j = self.randbelow(i + 1)
            indices[i], indices[j] = indices[j], indices[i]
        return indices[: min(k, population_size)]

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        """
        Pick ``min(k, len(population))`` distinct items from the population.

        Args:
            population (Sequence[T]): Commit identifiers
            k (int): Requested sample size

        Returns:
            List[T]: Selected items, empty for an empty population
        """
        return [population[i] for i in self.sample_indices(len(population), k)]
