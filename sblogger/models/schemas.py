"""
Pydantic Models — Log Call Envelope
-----------------------------------
`LogCall` is the validated unit of input for one log invocation:
a message plus a metadata bag with two mandatory keys.

  - trace_id   correlation id, non-empty string
  - stack      closed set of origin tags (see `Stack`)

Every other metadata key is optional, untyped, and kept in insertion order.
Extra values are NOT validated or coerced here. Whether they serialize is
the formatter's problem, so an unserializable value fails as a FormatError
rather than a contract violation.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Stack(str, Enum):
    NODE = "NODE"
    GRAPHQL = "GRAPHQL"
    TEMPORAL = "TEMPORAL"
    REDIS = "REDIS"


class LogMetadata(BaseModel):
    model_config = ConfigDict(extra="allow", use_enum_values=True, frozen=True)

    trace_id: str = Field(..., min_length=1)
    stack: Stack

    def as_dict(self) -> dict[str, Any]:
        # extras bypass pydantic's serializer; encoding is the formatter's job
        return {
            "trace_id": self.trace_id,
            "stack": self.stack,
            **(self.model_extra or {}),
        }


class LogCall(BaseModel):
    message: str
    meta_data: LogMetadata
