import enum
import math
from dataclasses import dataclass, field
from typing import NamedTuple, Union

import numpy as np
from absl import flags

from webmercator.utils import FromDict
from webmercator.utils.standard_logger import build_logger

FLAGS = flags.FLAGS

logger = build_logger(__name__)

# Consts
EARTH_RADIUS = 6378137  # WGS84 equatorial radius, used as the sphere radius
MAX_EXTENT = math.pi * EARTH_RADIUS  # Half the equatorial circumference ~20037508.34m
DEFAULT_TILE_SIZE = 256

Index = Union[int, float]


# Value types, all unpack like an (x, y) pair
class LatLon(NamedTuple):
    lat: float
    lon: float


class MetersPoint(NamedTuple):
    x: float
    y: float


class PixelPoint(NamedTuple):
    x: Index  # float world pixels, int once floored
    y: Index


class TilePoint(NamedTuple):
    x: Index
    y: Index


class TileAndPixel(NamedTuple):
    tile: TilePoint
    pixel: PixelPoint


class TileIndexing(enum.Enum):
    """
    How a world pixel is turned into a tile index

    CEIL is `ceil(p / tile_size) - 1`, the convention of the tile server this was built against.
    It puts pixel 0 in tile -1 and pixel 256 in tile 0 (for 256px tiles).
    FLOOR is the usual XYZ `floor(p / tile_size)`, pixel 0 is in tile 0.
    """
    CEIL = "ceil"
    FLOOR = "floor"


# utils
def _errstate():
    """NaN and inf propagate like plain IEEE doubles instead of warning"""
    return np.errstate(divide="ignore", invalid="ignore", over="ignore")


def _as_float(v) -> np.float64:
    # float() first so None raises TypeError and non-numeric strings ValueError, numeric strings convert
    return np.float64(float(v))


def _index(v) -> Index:
    """int for finite values, an int can't hold nan or inf so those stay float"""
    return int(v) if np.isfinite(v) else float(v)


@dataclass(frozen=True)
class WebMercatorProjection(FromDict):
    """
    Converts between the four coordinate spaces of a spherical Web Mercator (EPSG:3857) tile pyramid

        LatLon <-> Meters <-> Pixels(zoom) <-> Tile(zoom)

    Meters are the canonical intermediate, lat/lon to pixels or tiles always goes through meters first.
    Nothing is validated, the tile size, zoom and lat/lon are passed straight into the arithmetic.
    Out of range input (|lat| >= 90, tile_size=0 ...) gives nan/inf rather than an exception.
    """
    tile_size: int = DEFAULT_TILE_SIZE
    tile_indexing: TileIndexing = TileIndexing.CEIL
    max_extent: float = field(init=False, default=MAX_EXTENT)
    initial_resolution: float = field(init=False)

    def __post_init__(self):
        # Allow settings dicts to carry the indexing as its string value
        if not isinstance(self.tile_indexing, TileIndexing):
            object.__setattr__(self, "tile_indexing", TileIndexing(self.tile_indexing))
        with _errstate():
            # World width / pixels across at zoom 0
            initial_resolution = float(2 * _as_float(self.max_extent) / self.tile_size)
        object.__setattr__(self, "initial_resolution", initial_resolution)
        logger.debug(f"WebMercatorProjection tile_size={self.tile_size} indexing={self.tile_indexing.value} "
                     f"initial_resolution={self.initial_resolution}")

    @classmethod
    def from_flags(cls) -> "WebMercatorProjection":
        """Projection set up from the parsed `--tile_size` and `--tile_indexing` flags"""
        return cls(tile_size=FLAGS.tile_size, tile_indexing=TileIndexing(FLAGS.tile_indexing))

    #########################################
    #########   LatLon <-> Meters   #########
    #########################################

    def lat_lon_to_meters(self, lat, lon) -> MetersPoint:
        """
        Convert a lat/lon in degrees to Web Mercator meters
        Args:
            lat: latitude in degrees
            lon: longitude in degrees

        Returns: MetersPoint(x, y), y is not finite as lat reaches +-90
        """
        lat, lon = _as_float(lat), _as_float(lon)
        with _errstate():
            meters_x = lon * self.max_extent / 180
            meters_y = np.log(np.tan((90 + lat) * math.pi / 360)) / (math.pi / 180) * self.max_extent / 180
        return MetersPoint(float(meters_x), float(meters_y))

    def meters_to_lat_lon(self, meters_x, meters_y) -> LatLon:
        """Inverse of `lat_lon_to_meters`"""
        meters_x, meters_y = _as_float(meters_x), _as_float(meters_y)
        with _errstate():
            lon = meters_x / self.max_extent * 180
            lat = meters_y / self.max_extent * 180
            lat = 180 / math.pi * (2 * np.arctan(np.exp(lat * math.pi / 180)) - math.pi / 2)
        return LatLon(float(lat), float(lon))

    #########################################
    #########   Meters <-> Pixels   #########
    #########################################

    def get_resolution(self, zoom) -> float:
        """
        Meters per pixel at a zoom level, halves with every zoom step
        :param zoom: zoom level, 0 returns `initial_resolution` exactly
        :return: resolution in meters/pixel
        """
        with _errstate():
            return float(_as_float(self.initial_resolution) / np.power(2.0, zoom))

    def pixels_to_meters(self, pixel_x, pixel_y, zoom) -> MetersPoint:
        """
        World pixels at `zoom` to meters. Pixel origin is the top left of the world,
        pixel y grows down (south) while meters y grows up (north)
        """
        resolution = self.get_resolution(zoom)
        pixel_x, pixel_y = _as_float(pixel_x), _as_float(pixel_y)
        with _errstate():
            meters_x = pixel_x * resolution - self.max_extent
            meters_y = self.max_extent - pixel_y * resolution
        return MetersPoint(float(meters_x), float(meters_y))

    def meters_to_pixels(self, meters_x, meters_y, zoom) -> PixelPoint:
        resolution = self.get_resolution(zoom)
        meters_x, meters_y = _as_float(meters_x), _as_float(meters_y)
        with _errstate():
            pixel_x = (meters_x + self.max_extent) / resolution
            pixel_y = (self.max_extent - meters_y) / resolution
        return PixelPoint(float(pixel_x), float(pixel_y))

    def pixels_to_lat_lon(self, pixel_x, pixel_y, zoom) -> LatLon:
        meters_x, meters_y = self.pixels_to_meters(pixel_x, pixel_y, zoom)
        return self.meters_to_lat_lon(meters_x, meters_y)

    def lat_lon_to_pixels(self, lat, lon, zoom) -> PixelPoint:
        meters_x, meters_y = self.lat_lon_to_meters(lat, lon)
        return self.meters_to_pixels(meters_x, meters_y, zoom)

    def lat_lon_to_pixels_floor(self, lat, lon, zoom) -> PixelPoint:
        """
        `lat_lon_to_pixels` floored to whole pixels, flooring goes towards -inf so -0.5 becomes -1
        """
        pixel_x, pixel_y = self.lat_lon_to_pixels(lat, lon, zoom)
        return PixelPoint(_index(np.floor(pixel_x)), _index(np.floor(pixel_y)))

    #########################################
    #########     Pixels -> Tile    #########
    #########################################

    def pixels_to_tile(self, pixel_x, pixel_y) -> TilePoint:
        """
        Tile index that holds a world pixel.

        With the default CEIL indexing this is `ceil(pixel / tile_size) - 1`, NOT the usual floor.
        Pixel 0 lands in tile -1 and pixel 256 in tile 0 (256px tiles), i.e. every tile covers
        the pixels (i * tile_size, (i + 1) * tile_size]. Tile servers built against this expect
        these exact boundaries so it is kept as is, pass `TileIndexing.FLOOR` for the standard index.

        Args:
            pixel_x: world pixel x
            pixel_y: world pixel y

        Returns: TilePoint(x, y) of ints, or floats if the pixel was not finite
        """
        pixel_x, pixel_y = _as_float(pixel_x), _as_float(pixel_y)
        with _errstate():
            if self.tile_indexing is TileIndexing.FLOOR:
                tile_x = np.floor(pixel_x / self.tile_size)
                tile_y = np.floor(pixel_y / self.tile_size)
            else:
                tile_x = np.ceil(pixel_x / self.tile_size) - 1
                tile_y = np.ceil(pixel_y / self.tile_size) - 1
        return TilePoint(_index(tile_x), _index(tile_y))

    def meters_to_tile(self, meters_x, meters_y, zoom) -> TilePoint:
        pixel_x, pixel_y = self.meters_to_pixels(meters_x, meters_y, zoom)
        return self.pixels_to_tile(pixel_x, pixel_y)

    def lat_lon_to_tile(self, lat, lon, zoom) -> TilePoint:
        meters_x, meters_y = self.lat_lon_to_meters(lat, lon)
        return self.meters_to_tile(meters_x, meters_y, zoom)

    def lat_lon_to_tile_and_pixel(self, lat, lon, zoom) -> TileAndPixel:
        """
        Tile holding a lat/lon and the pixel inside that tile.
        The relative pixel is the floored world pixel mod tile_size, always in [0, tile_size).
        It is not derived from the tile, so with CEIL indexing a point on a tile edge reads as
        pixel 0 of the following tile index.
        """
        meters_x, meters_y = self.lat_lon_to_meters(lat, lon)
        tile = self.meters_to_tile(meters_x, meters_y, zoom)
        pixel_x, pixel_y = self.meters_to_pixels(meters_x, meters_y, zoom)

        with _errstate():
            # np.mod takes the sign of the divisor, negative pixels still land in [0, tile_size)
            rel_x = np.mod(np.floor(pixel_x), self.tile_size)
            rel_y = np.mod(np.floor(pixel_y), self.tile_size)
        return TileAndPixel(tile=tile, pixel=PixelPoint(_index(rel_x), _index(rel_y)))
