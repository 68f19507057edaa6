"""tablecfg - Bootstrap application configuration from a DynamoDB table"""

__version__ = "1.0.0"
__description__ = "Bootstrap application configuration from a DynamoDB table"

__all__ = ["main", "ConfigLocator", "__version__"]


def __getattr__(name: str):
    """Lazy import so ``tablecfg.core`` can be used without boto3 or dotenv.

    The core only depends on the ``TableStore`` port; the CLI pulls in the
    boto3 adapter and environment configuration.
    """
    if name == "ConfigLocator":
        from .core.locator import ConfigLocator

        return ConfigLocator
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
