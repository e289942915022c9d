from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class PLMException(Exception):
    """
    Base exception for request-level failures.

    Routers translate it into an HTTP error using:
    - attributes: message/code/status_code/details/user_message
    - method: to_dict()
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "PLM_ERROR",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details: Dict[str, Any] = details or {}
        self.user_message = user_message or message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ValidationError(PLMException):
    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"field": field} if field else {}
        details.update(kwargs)
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details=details,
            user_message=f"Validation failed: {message}",
        )


class ConfigurationError(PLMException):
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"config_key": config_key} if config_key else {}
        details.update(kwargs)
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            status_code=500,
            details=details,
            user_message="System configuration error",
        )


class PartNotFoundError(PLMException):
    def __init__(self, ipn: str, **kwargs: Any):
        details: Dict[str, Any] = {"ipn": ipn}
        details.update(kwargs)
        super().__init__(
            message=f"Part {ipn} not found",
            code="PART_NOT_FOUND",
            status_code=404,
            details=details,
        )


class NotAnAssemblyError(PLMException):
    def __init__(self, ipn: str, prefixes: Sequence[str] = (), **kwargs: Any):
        prefix_list = [p.rstrip("-") for p in prefixes]
        details: Dict[str, Any] = {"ipn": ipn, "prefixes": list(prefixes)}
        details.update(kwargs)
        suffix = f" ({', '.join(prefix_list)} prefix)" if prefix_list else ""
        super().__init__(
            message=f"BOM only available for assembly IPNs{suffix}",
            code="NOT_AN_ASSEMBLY",
            status_code=400,
            details=details,
        )


class CatalogUnavailableError(PLMException):
    """
    The catalog root directory cannot be read.

    `catalog` holds the empty-but-valid result of the failed load so callers
    that degrade gracefully can keep going.
    """

    def __init__(self, parts_dir: str, reason: str = "", catalog: Any = None):
        self.catalog = catalog
        super().__init__(
            message=f"Parts catalog unavailable: {parts_dir}",
            code="CATALOG_UNAVAILABLE",
            status_code=500,
            details={"parts_dir": parts_dir, "reason": reason},
            user_message="Parts catalog is unavailable",
        )


class PricingStoreError(PLMException):
    def __init__(self, reason: str, **kwargs: Any):
        details: Dict[str, Any] = {"reason": reason}
        details.update(kwargs)
        super().__init__(
            message=f"Pricing store unavailable: {reason}",
            code="PRICING_STORE_UNAVAILABLE",
            status_code=500,
            details=details,
            user_message="Pricing store is unavailable; run `partsplm init-db` if it was never created",
        )
