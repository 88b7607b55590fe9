"""
Exchange factory for creating exchange clients dynamically.
"""

from typing import Any, Optional, Type


class ExchangeFactory:
    """Factory class for creating exchange clients."""

    _registered_exchanges = {
        'hyperliquid': 'exchange_clients.hyperliquid.HyperliquidClient',
    }

    @classmethod
    def create_exchange(cls, exchange_name: str, settings: Optional[Any] = None) -> Any:
        """Create an exchange client instance from its settings.

        Args:
            exchange_name: Name of the exchange (e.g., 'hyperliquid')
            settings: Exchange settings object (loaded from the environment when None)

        Returns:
            Exchange client instance

        Raises:
            ValueError: If the exchange is not supported
            MissingCredentialsError: If the settings lack required credentials
        """
        exchange_name = exchange_name.lower()

        if exchange_name not in cls._registered_exchanges:
            available_exchanges = ', '.join(cls._registered_exchanges.keys())
            raise ValueError(f"Unsupported exchange: {exchange_name}. Available exchanges: {available_exchanges}")

        # Dynamically import the exchange class only when needed
        exchange_class_path = cls._registered_exchanges[exchange_name]
        exchange_class = cls._import_exchange_class(exchange_class_path)
        return exchange_class.from_settings(settings)

    @classmethod
    def _import_exchange_class(cls, class_path: str) -> Type[Any]:
        """Dynamically import an exchange class.

        Args:
            class_path: Full module path to the exchange class
                (e.g., 'exchange_clients.hyperliquid.HyperliquidClient')

        Raises:
            ImportError: If the class cannot be imported
            ValueError: If the class cannot be built from settings
        """
        try:
            module_path, class_name = class_path.rsplit('.', 1)
            module = __import__(module_path, fromlist=[class_name])
            exchange_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ImportError(f"Failed to import exchange class {class_path}: {e}")

        if not callable(getattr(exchange_class, "from_settings", None)):
            raise ValueError(f"Exchange class {class_name} must provide from_settings()")

        return exchange_class

    @classmethod
    def get_supported_exchanges(cls) -> list:
        """Get list of supported exchanges."""
        return list(cls._registered_exchanges.keys())

    @classmethod
    def register_exchange(cls, name: str, exchange_class: type) -> None:
        """Register a new exchange client.

        Args:
            name: Exchange name
            exchange_class: Exchange client class exposing ``from_settings``
        """
        if not callable(getattr(exchange_class, "from_settings", None)):
            raise ValueError("Exchange class must provide from_settings()")

        # Convert class to module path for lazy loading
        class_path = f"{exchange_class.__module__}.{exchange_class.__name__}"
        cls._registered_exchanges[name.lower()] = class_path
