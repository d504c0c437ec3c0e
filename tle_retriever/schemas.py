from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime, TypeAdapter

UNKNOWN_OBJECT_NAME = "Unknown"


class TleRecord(BaseModel):
    """One element of the Space-Track ``gp`` class JSON response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    object_name: str | None = Field(default=None, alias="OBJECT_NAME")
    international_designator: str | None = Field(default=None, alias="OBJECT_ID")
    norad_id: str = Field(alias="NORAD_CAT_ID")
    epoch: NaiveDatetime = Field(alias="EPOCH")
    revolution_number: str = Field(alias="REV_AT_EPOCH")
    line_1: str = Field(alias="TLE_LINE1")
    line_2: str = Field(alias="TLE_LINE2")

    @property
    def display_name(self) -> str:
        return self.object_name if self.object_name is not None else UNKNOWN_OBJECT_NAME


TleRecordList = TypeAdapter(list[TleRecord])
