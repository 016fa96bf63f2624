# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from maasclient.errors import SerializationError


class MAASBaseModel(BaseModel):
    """Base class for records deserialized from API responses.

    Records are read-only. Keys the model doesn't know about are ignored,
    so newer servers returning more data don't break older clients.
    """

    model_config = ConfigDict(
        frozen=True, extra="ignore", populate_by_name=True
    )

    @classmethod
    def from_json(cls, data: Any) -> Self:
        try:
            return cls.model_validate(data)
        except ValidationError as error:
            raise SerializationError(error) from error

    @classmethod
    def from_json_list(cls, data: Any) -> list[Self]:
        if not isinstance(data, list):
            error = TypeError(
                f"Expected a list of objects, got {type(data).__name__}"
            )
            raise SerializationError(error)
        return [cls.from_json(item) for item in data]
