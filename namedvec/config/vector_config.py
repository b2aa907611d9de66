# namedvec/config/vector_config.py
from enum import Enum

from pydantic import BaseModel


class BroadcastLayout(str, Enum):
    # result takes the first NamedVec operand's FieldMap, others unchecked
    FIRST = "first"
    # every NamedVec operand must share the same field names / order
    STRICT = "strict"


class VectorConfig(BaseModel):
    broadcast_layout: BroadcastLayout = BroadcastLayout.FIRST
