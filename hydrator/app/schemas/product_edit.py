"""
Payload schema for the "Products/Edit" page.

Mirrors the props computed by the product presenter's edit view. Field
names and types are the wire contract between presenter and renderer:
any presenter-side rename or type change is a breaking change and must
be mirrored here.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr

from hydrator.app.schemas.shared import (
    CustomDomainVerificationStatus,
    IsoDateString,
    NonNegativeCount,
    ObjectList,
    OpaqueObject,
    wire_field,
)


class ProductEditPayload(BaseModel):
    """
    Props handed to the product edit page.

    Required fields must be present even when nullable. Fields outside
    this declaration are passed through untouched unless the owning
    PayloadSchema forbids them.
    """

    # ------------------------------------------------------------------
    # Product identity
    # ------------------------------------------------------------------
    identifier: StrictStr = wire_field("identifier", "id")
    permalink: StrictStr = wire_field("permalink", "unique_permalink")
    thumbnail: Optional[OpaqueObject] = wire_field("thumbnail", "thumbnail")

    # Full product document. Optional: not every presenter revision
    # embeds it alongside the flattened fields below.
    product: Optional[OpaqueObject] = wire_field(
        "product", "product", default=None
    )

    # ------------------------------------------------------------------
    # Pricing and product kind
    # ------------------------------------------------------------------
    refund_policies: ObjectList = wire_field(
        "refundPolicies", "refund_policies"
    )
    currency_type: StrictStr = wire_field("currencyType", "currency_type")
    is_tiered_membership: StrictBool = wire_field(
        "isTieredMembership", "is_tiered_membership"
    )
    is_listed_on_discover: StrictBool = wire_field(
        "isListedOnDiscover", "is_listed_on_discover"
    )
    is_physical: StrictBool = wire_field("isPhysical", "is_physical")
    earliest_membership_price_change_date: IsoDateString = wire_field(
        "earliestMembershipPriceChangeDate",
        "earliest_membership_price_change_date",
    )

    # ------------------------------------------------------------------
    # Storefront
    # ------------------------------------------------------------------
    profile_sections: ObjectList = wire_field(
        "profileSections", "profile_sections"
    )
    taxonomies: ObjectList = wire_field("taxonomies", "taxonomies")
    custom_domain_verification_status: Optional[
        CustomDomainVerificationStatus
    ] = wire_field(
        "customDomainVerificationStatus",
        "custom_domain_verification_status",
    )

    # ------------------------------------------------------------------
    # Sales
    # ------------------------------------------------------------------
    sales_count_for_inventory: NonNegativeCount = wire_field(
        "salesCountForInventory", "sales_count_for_inventory"
    )
    successful_sales_count: NonNegativeCount = wire_field(
        "successfulSalesCount", "successful_sales_count"
    )
    ratings: OpaqueObject = wire_field("ratings", "ratings")
    seller: OpaqueObject = wire_field("seller", "seller")

    # ------------------------------------------------------------------
    # Files and uploads
    # ------------------------------------------------------------------
    existing_files: ObjectList = wire_field(
        "existingFiles", "existing_files"
    )
    aws_key: StrictStr = wire_field("awsKey", "aws_key")
    s3_url: StrictStr = wire_field("s3Url", "s3_url")

    # ------------------------------------------------------------------
    # Shipping and integrations
    # ------------------------------------------------------------------
    available_countries: ObjectList = wire_field(
        "availableCountries", "available_countries"
    )
    google_client_id: StrictStr = wire_field(
        "googleClientId", "google_client_id"
    )
    google_calendar_enabled: StrictBool = wire_field(
        "googleCalendarEnabled", "google_calendar_enabled"
    )

    # ------------------------------------------------------------------
    # Refund policy and retention
    # ------------------------------------------------------------------
    seller_refund_policy_enabled: StrictBool = wire_field(
        "sellerRefundPolicyEnabled", "seller_refund_policy_enabled"
    )
    seller_refund_policy: OpaqueObject = wire_field(
        "sellerRefundPolicy", "seller_refund_policy"
    )
    cancellation_discounts_enabled: StrictBool = wire_field(
        "cancellationDiscountsEnabled", "cancellation_discounts_enabled"
    )

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
    )
