from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel

from jsonshape.errors import DecodeError
from jsonshape.render import error_payload


class FrameDTO(BaseModel):
    kind: str
    key: Optional[str] = None
    index: Optional[int] = None
    expected: Optional[str] = None
    actual_kind: Optional[str] = None
    actual: Optional[str] = None
    container: Optional[str] = None
    branches: List[TrailDTO] = []


class TrailDTO(BaseModel):
    pointer: str
    path: List[Union[int, str]]
    frames: List[FrameDTO]


FrameDTO.model_rebuild()
TrailDTO.model_rebuild()


class DecodeReportDTO(BaseModel):
    ok: bool
    value: Optional[Any] = None
    error: Optional[TrailDTO] = None
    message: Optional[str] = None


def trail_dto(error: DecodeError) -> TrailDTO:
    return TrailDTO.model_validate(error_payload(error))
