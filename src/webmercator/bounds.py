from typing import NamedTuple

from webmercator.projection import WebMercatorProjection


class PixelBounds(NamedTuple):
    left: float
    top: float
    right: float
    bottom: float


class MeterBounds(NamedTuple):
    west: float
    south: float
    east: float
    north: float


class LatLonBounds(NamedTuple):
    west: float
    south: float
    east: float
    north: float


def tile_pixel_bounds(projection: WebMercatorProjection, tile_x, tile_y) -> PixelBounds:
    """
    World pixel corners of a tile, the tile spans [left, right] x [top, bottom]
    Args:
        projection: projection giving the tile size
        tile_x: tile column
        tile_y: tile row

    Returns: PixelBounds, top < bottom since pixel y grows down
    """
    size = projection.tile_size
    return PixelBounds(left=tile_x * size, top=tile_y * size,
                       right=(tile_x + 1) * size, bottom=(tile_y + 1) * size)


def tile_meter_bounds(projection: WebMercatorProjection, tile_x, tile_y, zoom) -> MeterBounds:
    px = tile_pixel_bounds(projection, tile_x, tile_y)
    west, north = projection.pixels_to_meters(px.left, px.top, zoom)
    east, south = projection.pixels_to_meters(px.right, px.bottom, zoom)
    return MeterBounds(west=west, south=south, east=east, north=north)


def tile_lat_lon_bounds(projection: WebMercatorProjection, tile_x, tile_y, zoom) -> LatLonBounds:
    """
    Lon/lat box of a tile.
    With FLOOR indexing every point inside maps back to the tile, with the default CEIL
    indexing the west and north edges belong to the previous index
    """
    m = tile_meter_bounds(projection, tile_x, tile_y, zoom)
    south, west = projection.meters_to_lat_lon(m.west, m.south)
    north, east = projection.meters_to_lat_lon(m.east, m.north)
    return LatLonBounds(west=west, south=south, east=east, north=north)
