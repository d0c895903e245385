from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from java_heapdump.errors import ApiResponseError


class Dyno(BaseModel):
    model_config = ConfigDict(extra='ignore')
    type: str
    name: str
    state: Optional[str] = None

    @property
    def identifier(self) -> str:
        return f"{self.type}.{self.name}"


class AttachRequest(BaseModel):
    alias: str


class AttachResult(BaseModel):
    model_config = ConfigDict(extra='ignore')
    stdout: str = ""
    stderr: str = ""

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


def parse_dynos(data: Any) -> list[Dyno]:
    if not isinstance(data, list):
        raise ApiResponseError(f"Expected a list of dynos, got {type(data).__name__}")
    try:
        return [Dyno.model_validate(d) for d in data]
    except ValueError as e:
        raise ApiResponseError(f"Malformed dyno in response: {e}") from e


def parse_attach_result(data: Dict[str, Any]) -> AttachResult:
    try:
        return AttachResult.model_validate(data or {})
    except ValueError as e:
        raise ApiResponseError(f"Malformed attach response: {e}") from e
