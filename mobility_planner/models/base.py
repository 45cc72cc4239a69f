# mobility_planner/models/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueModel(BaseModel):
    """
    Immutable value object with camelCase wire names.

    Attributes are snake_case in Python; both spellings are accepted on input
    and responses are serialised by alias.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
