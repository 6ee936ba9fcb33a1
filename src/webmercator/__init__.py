from absl import flags

flags.DEFINE_integer("tile_size", default=256, help="Pixels per tile edge, usually 256 or 512")
flags.DEFINE_enum("tile_indexing", default="ceil", enum_values=["ceil", "floor"],
                  help="Pixel to tile convention, `ceil` is ceil(p / tile_size) - 1 (tile server compatible), "
                       "`floor` is the standard floor(p / tile_size)")
flags.DEFINE_bool("debug", default=False, short_name='d', help="If set will log at debug level")

from webmercator.projection import (  # noqa: E402
    DEFAULT_TILE_SIZE,
    EARTH_RADIUS,
    MAX_EXTENT,
    LatLon,
    MetersPoint,
    PixelPoint,
    TileAndPixel,
    TileIndexing,
    TilePoint,
    WebMercatorProjection,
)
from webmercator.bounds import (  # noqa: E402
    LatLonBounds,
    MeterBounds,
    PixelBounds,
    tile_lat_lon_bounds,
    tile_meter_bounds,
    tile_pixel_bounds,
)
