"""
Page payload schema and the validated payload it produces.

A PayloadSchema is a pure structural check: it binds a page identifier
to a pydantic model and turns an incoming props mapping into an
immutable PagePayload, or fails with SchemaError. Values are never
coerced, defaulted or renamed; the PagePayload holds the props exactly
as the presenter sent them.
"""

from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
)

from pydantic import AliasChoices, BaseModel, ValidationError

from hydrator.app.errors import SchemaError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validated payload
# ---------------------------------------------------------------------------


class PagePayload(Mapping[str, Any]):
    """
    Read-only props for a single page view.

    Iterating, indexing and comparing behave like the original mapping.
    The typed view of the same data is available as ``model``.
    """

    __slots__ = ("page", "url", "model", "_fields")

    def __init__(
        self,
        page: str,
        fields: Mapping[str, Any],
        model: BaseModel,
        url: Optional[str] = None,
    ) -> None:
        self.page = page
        self.url = url
        self.model = model
        self._fields = MappingProxyType(copy.deepcopy(dict(fields)))

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"PagePayload(page={self.page!r}, fields={sorted(self._fields)!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Detached deep copy, safe to serialize or mutate."""
        return copy.deepcopy(dict(self._fields))


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


def _field_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    # Inputs are dropped: payload values must not leak into logs.
    return [
        {
            "loc": tuple(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


class PayloadSchema:
    """
    Declared shape of the payload for one page identifier.

    ``allow_unknown_fields`` controls whether keys outside the model's
    declared wire names pass through to the renderer or are rejected.
    """

    def __init__(
        self,
        page: str,
        model: Type[BaseModel],
        *,
        allow_unknown_fields: bool = True,
    ) -> None:
        self.page = page
        self.model = model
        self.allow_unknown_fields = allow_unknown_fields

    @property
    def field_names(self) -> Tuple[Tuple[str, ...], ...]:
        """Accepted keys per declared field, wire name first."""
        groups = []
        for name, info in self.model.model_fields.items():
            alias = info.validation_alias
            if isinstance(alias, AliasChoices):
                groups.append(
                    tuple(c for c in alias.choices if isinstance(c, str))
                )
            elif isinstance(alias, str):
                groups.append((alias,))
            else:
                groups.append((info.alias or name,))
        return tuple(groups)

    @property
    def known_fields(self) -> FrozenSet[str]:
        """Every key the model accepts, including snake_case aliases."""
        return frozenset(key for group in self.field_names for key in group)

    def _reject(self, message: str, errors: List[Dict[str, Any]]) -> SchemaError:
        logger.warning(
            "Payload rejected for page=%s fields=%s",
            self.page,
            [error["loc"] for error in errors],
        )
        return SchemaError(message, page=self.page, errors=errors)

    def validate(
        self,
        payload: Mapping[str, Any],
        *,
        url: Optional[str] = None,
    ) -> PagePayload:
        """
        Check ``payload`` against the schema.

        Returns a PagePayload on success. Raises SchemaError when a
        required field is absent, a field is given under more than one of
        its names, a value fails its type predicate, or (with unknown
        fields disallowed) an undeclared key is present. The payload is
        deep-copied first; neither the typed model nor the returned
        mapping shares state with the caller.
        """
        if not isinstance(payload, Mapping):
            raise SchemaError(
                f"Payload for page '{self.page}' must be a mapping, "
                f"got {type(payload).__name__}.",
                page=self.page,
            )

        fields = copy.deepcopy(dict(payload))

        # Only one key per field is validated, so a second spelling of
        # the same field would reach the renderer unchecked.
        duplicated = [
            group
            for group in self.field_names
            if sum(key in fields for key in group) > 1
        ]
        if duplicated:
            raise self._reject(
                f"Payload for page '{self.page}' sets a field under more "
                "than one name.",
                [
                    {
                        "loc": (group[0],),
                        "msg": "Field given under more than one name: "
                        + ", ".join(key for key in group if key in fields),
                        "type": "duplicate_alias",
                    }
                    for group in duplicated
                ],
            )

        try:
            model = self.model.model_validate(fields)
        except ValidationError as exc:
            errors = _field_errors(exc)
            raise self._reject(
                f"Payload for page '{self.page}' does not match its schema "
                f"({len(errors)} error(s)).",
                errors,
            ) from exc

        if not self.allow_unknown_fields:
            unknown = sorted(set(fields) - self.known_fields)
            if unknown:
                raise self._reject(
                    f"Payload for page '{self.page}' has undeclared "
                    f"field(s): {', '.join(unknown)}.",
                    [
                        {
                            "loc": (key,),
                            "msg": "Extra inputs are not permitted",
                            "type": "extra_forbidden",
                        }
                        for key in unknown
                    ],
                )

        return PagePayload(self.page, fields, model, url=url)

    def json_schema(self) -> Dict[str, Any]:
        """
        JSON schema of the payload, keyed by camelCase wire names.

        ``additionalProperties`` reflects whether unknown fields pass.
        """
        schema = self.model.model_json_schema(by_alias=True)
        schema["additionalProperties"] = self.allow_unknown_fields
        return schema
