import pytest

from hydrator.app.errors import SchemaError
from hydrator.app.schemas.payload_schema import PagePayload, PayloadSchema
from hydrator.app.schemas.product_edit import ProductEditPayload
from hydrator.tests.fixtures.payload_factory import (
    product_edit_payload,
    product_edit_payload_without,
    snake_case_product_edit_payload,
)


@pytest.fixture
def schema() -> PayloadSchema:
    return PayloadSchema("Products/Edit", ProductEditPayload)


# ------------------------------------------------------------------
# Accepted payloads
# ------------------------------------------------------------------


def test_valid_payload_is_accepted_unchanged(schema):
    payload = product_edit_payload()

    validated = schema.validate(payload)

    assert isinstance(validated, PagePayload)
    assert validated.page == "Products/Edit"
    assert dict(validated) == payload
    assert validated.model.sales_count_for_inventory == 12
    assert validated.model.permalink == "demo-course"


def test_presenter_snake_case_keys_are_accepted(schema):
    payload = snake_case_product_edit_payload()

    validated = schema.validate(payload)

    assert set(validated) == set(payload)
    assert validated["unique_permalink"] == "demo-course"
    assert validated.model.identifier == "pr_8f2a1c"


def test_null_custom_domain_verification_status_is_accepted(schema):
    validated = schema.validate(
        product_edit_payload(customDomainVerificationStatus=None)
    )

    assert validated["customDomainVerificationStatus"] is None
    assert validated.model.custom_domain_verification_status is None


def test_custom_domain_verification_status_object_is_accepted(schema):
    validated = schema.validate(
        product_edit_payload(
            customDomainVerificationStatus={"success": True, "message": "ok"}
        )
    )

    status = validated.model.custom_domain_verification_status
    assert status.success is True
    assert status.message == "ok"


def test_null_thumbnail_is_accepted(schema):
    validated = schema.validate(product_edit_payload(thumbnail=None))
    assert validated["thumbnail"] is None


def test_zero_counts_are_accepted(schema):
    validated = schema.validate(
        product_edit_payload(salesCountForInventory=0, successfulSalesCount=0)
    )
    assert validated["salesCountForInventory"] == 0


def test_datetime_membership_price_change_date_is_accepted(schema):
    validated = schema.validate(
        product_edit_payload(
            earliestMembershipPriceChangeDate="2026-11-18T09:30:00+00:00"
        )
    )
    assert validated["earliestMembershipPriceChangeDate"] == (
        "2026-11-18T09:30:00+00:00"
    )


def test_embedded_product_document_is_optional_but_typed(schema):
    validated = schema.validate(product_edit_payload(product={"name": "Demo"}))
    assert validated["product"] == {"name": "Demo"}

    with pytest.raises(SchemaError):
        schema.validate(product_edit_payload(product="Demo"))


# ------------------------------------------------------------------
# Rejected payloads
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    "field",
    ["permalink", "identifier", "thumbnail", "customDomainVerificationStatus"],
)
def test_missing_required_field_is_rejected(schema, field):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(product_edit_payload_without(field))

    assert excinfo.value.page == "Products/Edit"
    assert any(error["type"] == "missing" for error in excinfo.value.errors)
    assert field in excinfo.value.fields


def test_negative_sales_count_is_rejected(schema):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(product_edit_payload(salesCountForInventory=-1))

    assert excinfo.value.fields == ["salesCountForInventory"]


@pytest.mark.parametrize("value", [True, 1.5, "3"])
def test_non_integer_sales_count_is_rejected(schema, value):
    with pytest.raises(SchemaError):
        schema.validate(product_edit_payload(successfulSalesCount=value))


def test_custom_domain_status_with_non_boolean_success_is_rejected(schema):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(
            product_edit_payload(customDomainVerificationStatus={"success": "yes"})
        )

    assert "customDomainVerificationStatus.success" in excinfo.value.fields


@pytest.mark.parametrize(
    "field, value",
    [
        ("isPhysical", "false"),
        ("isListedOnDiscover", 0),
        ("currencyType", 840),
        ("refundPolicies", {"id": "rp_1"}),
        ("taxonomies", ["Education"]),
        ("seller", ["s_1"]),
        ("earliestMembershipPriceChangeDate", "next tuesday"),
    ],
)
def test_wrongly_typed_field_is_rejected(schema, field, value):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(product_edit_payload(**{field: value}))

    assert excinfo.value.fields[0].startswith(field)


def test_non_mapping_payload_is_rejected(schema):
    with pytest.raises(SchemaError):
        schema.validate([("permalink", "demo-course")])


@pytest.mark.parametrize(
    "field, value",
    [
        ("awsKey", 12345),
        ("earliestMembershipPriceChangeDate", "SECRET-VALUE"),
        ("salesCountForInventory", -987654),
    ],
)
def test_schema_errors_do_not_carry_values(schema, field, value):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(product_edit_payload(**{field: value}))

    assert excinfo.value.errors
    for error in excinfo.value.errors:
        assert set(error) == {"loc", "msg", "type"}
        assert str(value) not in error["msg"]
    assert str(value) not in str(excinfo.value)


# ------------------------------------------------------------------
# Fields given under more than one name
# ------------------------------------------------------------------


@pytest.mark.parametrize("allow_unknown_fields", [True, False])
def test_field_given_under_both_names_is_rejected(allow_unknown_fields):
    schema = PayloadSchema(
        "Products/Edit",
        ProductEditPayload,
        allow_unknown_fields=allow_unknown_fields,
    )

    with pytest.raises(SchemaError) as excinfo:
        schema.validate(
            product_edit_payload(
                sales_count_for_inventory=-5, unique_permalink=42
            )
        )

    duplicates = {
        error["loc"]: error
        for error in excinfo.value.errors
        if error["type"] == "duplicate_alias"
    }
    assert set(duplicates) == {("permalink",), ("salesCountForInventory",)}
    assert "-5" not in duplicates[("salesCountForInventory",)]["msg"]


def test_field_given_under_both_names_is_rejected_even_when_equal(schema):
    with pytest.raises(SchemaError) as excinfo:
        schema.validate(product_edit_payload(id="pr_8f2a1c"))

    assert excinfo.value.errors[0]["type"] == "duplicate_alias"
    assert excinfo.value.fields == ["identifier"]


# ------------------------------------------------------------------
# Unknown fields
# ------------------------------------------------------------------


def test_unknown_fields_pass_through_by_default(schema):
    validated = schema.validate(product_edit_payload(featureFlags={"beta": True}))
    assert validated["featureFlags"] == {"beta": True}


def test_unknown_fields_can_be_forbidden():
    strict = PayloadSchema(
        "Products/Edit", ProductEditPayload, allow_unknown_fields=False
    )

    strict.validate(product_edit_payload())
    strict.validate(snake_case_product_edit_payload())

    with pytest.raises(SchemaError) as excinfo:
        strict.validate(product_edit_payload(featureFlags={}))

    assert excinfo.value.fields == ["featureFlags"]
    assert excinfo.value.errors[0]["type"] == "extra_forbidden"


# ------------------------------------------------------------------
# PagePayload
# ------------------------------------------------------------------


def test_page_payload_is_read_only_and_detached(schema):
    payload = product_edit_payload()
    validated = schema.validate(payload)

    with pytest.raises(TypeError):
        validated["permalink"] = "other"  # type: ignore[index]

    payload["seller"]["name"] = "Mutated"
    assert validated["seller"]["name"] == "Ada"

    copied = validated.to_dict()
    copied["seller"]["name"] = "Also mutated"
    assert validated["seller"]["name"] == "Ada"


def test_typed_model_is_detached_from_caller(schema):
    payload = product_edit_payload()
    validated = schema.validate(payload)

    payload["seller"]["name"] = "Mutated"
    payload["refundPolicies"].append({"id": "rp_2"})

    assert validated.model.seller["name"] == "Ada"
    assert len(validated.model.refund_policies) == 1
    assert validated.model.seller is not validated["seller"]


def test_json_schema_uses_wire_names(schema):
    json_schema = schema.json_schema()

    assert "salesCountForInventory" in json_schema["properties"]
    assert "permalink" in json_schema["required"]
    assert "product" not in json_schema["required"]
    assert json_schema["additionalProperties"] is True
