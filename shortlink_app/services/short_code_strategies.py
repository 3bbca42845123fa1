"""
Short code generation strategies for URL shortener.
Uses Strategy Pattern to allow different random sources.

Strategies only produce candidates. Uniqueness is enforced by URLService,
which checks each candidate against the store and retries on collision.
"""

import random
import secrets
from abc import ABC, abstractmethod

BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    def __init__(self, length: int = 7):
        if length < 1:
            raise ValueError(f"Short code length must be positive, got {length}")
        self.length = length
        self.characters = BASE62_CHARS

    @property
    def capacity(self) -> int:
        """Number of distinct codes this strategy can produce"""
        return len(self.characters) ** self.length

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.

        Returns:
            A string of `length` characters from the Base62 alphabet.
            Not guaranteed to be unique.
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Uniform random characters from the `random` module.

    Pros: Simple, fast
    Cons: Not cryptographically secure, codes are guessable in principle
    """

    def __init__(self, length: int = 7, rng: random.Random = None):
        super().__init__(length)
        self.rng = rng or random.Random()

    def generate(self) -> str:
        return ''.join(self.rng.choice(self.characters) for _ in range(self.length))


class SecureShortCodeStrategy(ShortCodeStrategy):
    """
    Uniform random characters from the OS CSPRNG (`secrets`).

    Use when short codes should resist enumeration.
    """

    def generate(self) -> str:
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))
