from dataclasses import dataclass, field


# Core geometry types, degrees in WGS84
@dataclass(frozen=True)
class Point:
    lon: float
    lat: float


@dataclass(frozen=True)
class BoundingBox:
    ullon: float  # west
    ullat: float  # north
    lrlon: float  # east
    lrlat: float  # south

    @property
    def lon_extent(self) -> float:
        return self.lrlon - self.ullon

    @property
    def lat_extent(self) -> float:
        return self.ullat - self.lrlat

    def is_degenerate(self) -> bool:
        return self.ullon > self.lrlon or self.lrlat > self.ullat

    def encloses(self, other: "BoundingBox") -> bool:
        # strict on every edge
        return (
            self.ullon < other.ullon
            and self.ullat > other.ullat
            and self.lrlon > other.lrlon
            and self.lrlat < other.lrlat
        )


@dataclass
class Vertex:
    id: int
    lon: float
    lat: float
    adj: set[int] = field(default_factory=set)
    tags: dict[str, str] = field(default_factory=dict)  # open OSM-style key/value store

    @property
    def point(self) -> Point:
        return Point(self.lon, self.lat)

    @property
    def name(self) -> str | None:
        return self.tags.get("name")
