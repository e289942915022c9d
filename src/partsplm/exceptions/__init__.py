from partsplm.exceptions.handlers import (
    CatalogUnavailableError,
    ConfigurationError,
    NotAnAssemblyError,
    PartNotFoundError,
    PLMException,
    PricingStoreError,
    ValidationError,
)

__all__ = [
    "PLMException",
    "ValidationError",
    "ConfigurationError",
    "PartNotFoundError",
    "NotAnAssemblyError",
    "CatalogUnavailableError",
    "PricingStoreError",
]
