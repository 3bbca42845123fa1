"""
Factory for creating short code generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    SecureShortCodeStrategy
)
from shortlink_app.config import settings


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    RANDOM = "random"
    SECURE = "secure"


class ShortCodeFactory:
    """Factory for creating short code generation strategies with caching"""

    _instances = {}  # Cache keyed by (strategy_type, length)

    @classmethod
    def create_strategy(
        cls,
        strategy_type: ShortCodeStrategyType = None,
        length: int = None
    ) -> ShortCodeStrategy:
        """
        Create or return cached short code generation strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.
            length: Code length. If None, uses value from settings.

        Returns:
            A cached instance of a ShortCodeStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(settings.short_code_strategy)
        if length is None:
            length = settings.short_code_length

        key = (strategy_type, length)
        if key in cls._instances:
            return cls._instances[key]

        if strategy_type == ShortCodeStrategyType.RANDOM:
            instance = RandomShortCodeStrategy(length=length)
        elif strategy_type == ShortCodeStrategyType.SECURE:
            instance = SecureShortCodeStrategy(length=length)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[key] = instance
        return instance

    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances.clear()
