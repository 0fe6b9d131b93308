from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- RASTER ---------------------


class RootBoxModel(BaseModel):
    """Bounds of the depth-0 tile; defaults cover the Berkeley dataset."""

    model_config = ConfigDict(extra="forbid")
    ullon: float = -122.2998046875
    ullat: float = 37.892195547244356
    lrlon: float = -122.2119140625
    lrlat: float = 37.82280243352756

    @model_validator(mode="after")
    def _check_orientation(self):
        if not self.ullon < self.lrlon:
            raise ValueError("root ullon must be west of lrlon")
        if not self.lrlat < self.ullat:
            raise ValueError("root lrlat must be south of ullat")
        return self


class RasterModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    root: RootBoxModel = Field(default_factory=RootBoxModel)
    tile_size: int = Field(default=256, gt=0)  # pixels per tile edge
    max_depth: int = Field(default=7, ge=0, le=30)
    image_ext: str = ".png"


# ----------------- NEAREST VERTEX ---------------------


class NearestScanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["scan"] = "scan"


class NearestVectorizedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["vectorized"] = "vectorized"


NearestUnion = Annotated[
    NearestScanModel | NearestVectorizedModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class MapIndexModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "map_index"
    run_id: str = "local"
    log: LogModel = LogModel()
    raster: RasterModel = Field(default_factory=RasterModel)
    nearest: NearestUnion = Field(default_factory=NearestScanModel)
