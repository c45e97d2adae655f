"""Target schemas - what gets health-checked and how."""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr


class HttpCheck(BaseModel):
    """GET a URL; healthy on a 2xx/3xx status."""
    type: Literal["http"] = "http"
    url: StrictStr

    class Config:
        frozen = True
        extra = "forbid"


class TcpCheck(BaseModel):
    """Open a TCP connection; healthy once it completes."""
    type: Literal["tcp"] = "tcp"
    host: StrictStr
    port: StrictInt = Field(..., ge=1, le=65535)

    class Config:
        frozen = True
        extra = "forbid"


Check = Annotated[Union[HttpCheck, TcpCheck], Field(discriminator="type")]

SUPPORTED_TYPES = ("http", "tcp")


def check_kind(check: Check) -> str:
    match check:
        case HttpCheck():
            return "http"
        case TcpCheck():
            return "tcp"
    raise TypeError(f"Unknown check: {check!r}")


def check_icon(check: Check) -> str:
    match check:
        case HttpCheck():
            return "🌐"
        case TcpCheck():
            return "🔌"
    raise TypeError(f"Unknown check: {check!r}")


class Target(BaseModel):
    """A named, immutable health-check target."""
    name: str
    check: Check

    class Config:
        frozen = True
        extra = "forbid"

    @property
    def kind(self) -> str:
        return check_kind(self.check)

    @property
    def icon(self) -> str:
        return check_icon(self.check)

    def __str__(self) -> str:
        return self.name
