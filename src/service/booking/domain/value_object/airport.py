import attrs


@attrs.define(frozen=True)
class Airport:
    code: str
    name: str
    city: str
    country: str
