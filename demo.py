"""
Leif Theden "bitcraft", 2012-2023

Print the contents of a Tiled JSON map.  This simply shows that the
loader works; no images are loaded.

usage: python demo.py map.tmj
"""

import logging
import sys

from pytmj import PyTMJException, load_map

logger = logging.getLogger(__name__)


def print_layers(layers, indent=0):
    pad = '  ' * indent
    for layer in layers:
        print('{}{!r} visible={} opacity={}'.format(
            pad, layer, layer.visible, layer.opacity))
        if layer.is_tile_layer():
            used = sum(1 for gid in layer.get_data() if gid)
            print('{}  {}x{} tiles, {} used'.format(
                pad, layer.width, layer.height, used))
        elif layer.is_object_group():
            for obj in layer.get_objects():
                print('{}  object {} "{}" at ({}, {})'.format(
                    pad, obj.id, obj.name, obj.x, obj.y))
        elif layer.is_image_layer():
            print('{}  image {}'.format(pad, layer.get_image()))
        elif layer.is_group():
            print_layers(layer.get_layers(), indent + 1)
        for prop in layer.properties:
            print('{}  {} ({}) = {}'.format(
                pad, prop.name, prop.type_as_string(), prop.value))


def main(filename):
    logging.basicConfig(level=logging.INFO)
    try:
        tiled_map = load_map(filename)
    except (OSError, PyTMJException) as e:
        logger.error('cannot load %s: %s', filename, e)
        return 1

    print('{!r} {} {}x{} tiles of {}x{} px'.format(
        tiled_map, tiled_map.orientation.value, tiled_map.width,
        tiled_map.height, tiled_map.tilewidth, tiled_map.tileheight))
    for tileset in tiled_map.tilesets:
        print('{!r} {} tiles, {} columns, image {}'.format(
            tileset, tileset.tilecount, tileset.columns, tileset.image))
    print_layers(tiled_map.layers)
    return 0


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(main(sys.argv[1]))
