from typing import Dict

from absl import app, flags, logging
from rich.console import Console
from rich.table import Table

from webmercator.projection import WebMercatorProjection
from webmercator.utils.standard_logger import install_formatter

flags.DEFINE_float("lat", default=None, help="Latitude in degrees")
flags.DEFINE_float("lon", default=None, help="Longitude in degrees")
flags.DEFINE_integer("zoom", default=0, help="Zoom level")

FLAGS = flags.FLAGS


def describe_point(projection: WebMercatorProjection, lat: float, lon: float, zoom: int) -> Dict[str, tuple]:
    """
    Every space a lat/lon maps to at `zoom`
    Returns: ordered dict of row name -> (x, y)
    """
    tile_and_pixel = projection.lat_lon_to_tile_and_pixel(lat, lon, zoom)
    return {
        "lat/lon": (lat, lon),
        "meters": tuple(projection.lat_lon_to_meters(lat, lon)),
        "pixels": tuple(projection.lat_lon_to_pixels(lat, lon, zoom)),
        "pixels (floor)": tuple(projection.lat_lon_to_pixels_floor(lat, lon, zoom)),
        "tile": tuple(tile_and_pixel.tile),
        "pixel in tile": tuple(tile_and_pixel.pixel),
    }


def build_table(rows: Dict[str, tuple], title: str) -> Table:
    table = Table(title=title)
    table.add_column("space", style="bold")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for name, (x, y) in rows.items():
        table.add_row(name, str(x), str(y))
    return table


def main(argv, console: Console = None):
    if len(argv) > 1:
        raise app.UsageError("Too many command-line arguments.")
    if FLAGS.lat is None or FLAGS.lon is None:
        raise app.UsageError("--lat and --lon are required")
    install_formatter(debug=FLAGS.debug)

    projection = WebMercatorProjection.from_flags()
    logging.debug(f"Projection settings: {projection.settings_dict()}")
    logging.info(f"Converting ({FLAGS.lat}, {FLAGS.lon}) at zoom {FLAGS.zoom}")
    rows = describe_point(projection, FLAGS.lat, FLAGS.lon, FLAGS.zoom)

    console = console if console else Console()
    title = f"zoom {FLAGS.zoom}, {projection.tile_size}px tiles, {projection.tile_indexing.value} indexing"
    console.print(build_table(rows, title))
    return rows


def run():
    app.run(main)


if __name__ == "__main__":
    run()
