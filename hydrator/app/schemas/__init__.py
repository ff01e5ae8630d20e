from .payload_schema import PagePayload, PayloadSchema
from .product_edit import ProductEditPayload
from .shared import CustomDomainVerificationStatus

__all__ = [
    "PagePayload",
    "PayloadSchema",
    "ProductEditPayload",
    "CustomDomainVerificationStatus",
]
