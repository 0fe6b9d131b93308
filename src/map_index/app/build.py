# map_index/app/build.py
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from map_index.app.hooks import NoopHooks, QueryHooks
from map_index.config.models import MapIndexModel
from map_index.domain.index.index_builder import GraphBuilder
from map_index.domain.index.index_core import LocationIndex
from map_index.domain.raster.rasterer import Rasterer
from map_index.io.query_logging import QueryLogging  # JSON logs
from map_index.io.recorder import Recorder

Ingest = Callable[[GraphBuilder], None]


@dataclass
class App:
    rasterer: Rasterer
    locations: LocationIndex
    hooks: QueryHooks


def build(
    cfg: MapIndexModel | Mapping | None = None,
    *,
    ingest: Ingest | None = None,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = MapIndexModel()
    else:
        model = cfg if isinstance(cfg, MapIndexModel) else MapIndexModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Location graph, filled by the ingestion side then frozen
    builder = GraphBuilder(hooks=hooks)
    if ingest is not None:
        ingest(builder)
    locations = builder.finish(model.nearest)

    # 3) Tiles
    rasterer = Rasterer(model.raster, hooks=hooks)

    return App(rasterer, locations, hooks)
