"""Common base for the API schemas.

Attributes are snake_case in Python and camelCase on the wire
(``phone_number`` is sent and received as ``phoneNumber``).  Requests may
use either spelling.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
