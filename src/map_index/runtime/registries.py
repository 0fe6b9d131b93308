# runtime/registries.py
from collections.abc import Callable
from typing import Any

from map_index.app.protocols import NearestFinder
from map_index.config.models import NearestScanModel, NearestUnion, NearestVectorizedModel
from map_index.domain.index.index_nearest import ScanNearestFinder, VectorizedNearestFinder

NearestFactory = Callable[[NearestUnion, dict[str, Any]], NearestFinder]

_nearest_registry: dict[str, NearestFactory] = {}


def register_nearest(kind: str):
    def deco(fn: NearestFactory):
        _nearest_registry[kind] = fn
        return fn

    return deco


def make_nearest(cfg: NearestUnion, *, graph) -> NearestFinder:
    try:
        factory = _nearest_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown nearest kind {cfg.kind!r}") from None
    return factory(cfg, {"graph": graph})


@register_nearest("scan")
def _make_scan(cfg: NearestScanModel, deps):
    return ScanNearestFinder(deps["graph"])


@register_nearest("vectorized")
def _make_vectorized(cfg: NearestVectorizedModel, deps):
    return VectorizedNearestFinder(deps["graph"])
