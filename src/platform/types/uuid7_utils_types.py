"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__

UUID7 Pydantic type

Reservation ids are generated with ``uuid_utils.uuid7()``. ``uuid_utils.UUID`` has no
Pydantic integration, so path parameters and response models use ``UtilsUUID7``:

```python
class ReservationResponse(BaseModel):
    id: UtilsUUID7  # JSON string in, uuid_utils.UUID inside, JSON string out
```
"""

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


class UtilsUUID7(UUID):
    """Pydantic-compatible ``uuid_utils.UUID``."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        JSON mode only accepts strings (JSON has no UUID type); Python mode also accepts
        ``uuid_utils.UUID`` and stdlib ``uuid.UUID`` instances. Serialization is always ``str``.

        ``json_or_python_schema`` is used instead of a plain validator function because the
        latter cannot be rendered into the OpenAPI document.
        """

        def _to_uuid(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            try:
                return UUID(str(value))
            except ValueError as e:
                raise ValueError(f'Invalid UUID: {value}') from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(_to_uuid),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # handler(schema) would expand the validator chain into the OpenAPI document
        return {'type': 'string', 'format': 'uuid'}
