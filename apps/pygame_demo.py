"""
Leif Theden "bitcraft", 2012-2023

Render Tiled JSON maps with pygame.

usage: python pygame_demo.py [map.tmj ...]

Without arguments, every .tmj and .json map in the data folder is shown.
"""

import glob
import logging
import os.path
import sys

import pygame
from pygame.locals import *

from pytmj.util_pygame import load_pygame

logger = logging.getLogger(__name__)


def init_screen(width, height):
    """ Set the screen mode
    This function is used to handle window resize events
    """
    return pygame.display.set_mode((width, height), pygame.RESIZABLE)


class TiledRenderer(object):
    """
    Super simple way to render a tiled map
    Don't use this code as scaffolding.
    """

    def __init__(self, filename):
        pm = load_pygame(filename)
        tm = pm.tmjmap
        self.pixel_size = tm.width * tm.tilewidth, tm.height * tm.tileheight
        self.tmj_data = pm
        self.folder = os.path.dirname(filename)
        self.layer_images = dict()

    def render_map(self, surface):
        tm = self.tmj_data.tmjmap
        if tm.backgroundcolor:
            surface.fill(tm.backgroundcolor.as_tuple())
        for layer in tm.all_layers():
            if not layer.visible:
                continue
            if layer.is_tile_layer():
                self.render_tile_layer(surface, layer)
            elif layer.is_object_group():
                self.render_object_layer(surface, layer)
            elif layer.is_image_layer():
                self.render_image_layer(surface, layer)

    def render_tile_layer(self, surface, layer):
        """ Render all tiles in this layer
        """
        # deref these heavily used references for speed
        tw = self.tmj_data.tmjmap.tilewidth
        th = self.tmj_data.tmjmap.tileheight
        surface_blit = surface.blit
        get_image = self.tmj_data.get_tile_image_by_gid

        # iterate over the tiles in the layer, and blit them
        for x, y, gid in layer.iter_data():
            image = get_image(gid)
            if image is not None:
                surface_blit(image, (x * tw, y * th))

    def render_object_layer(self, surface, layer):
        """ Render all objects contained in this layer
        """
        # deref these heavily used references for speed
        draw_rect = pygame.draw.rect
        draw_lines = pygame.draw.lines
        surface_blit = surface.blit

        # these colors are used to draw vector shapes,
        # like polygon and box shapes
        rect_color = (255, 0, 0)
        poly_color = (0, 255, 0)
        for obj in layer.get_objects():
            logger.info(obj)
            if obj.is_polygon() or obj.is_polyline():
                points = [(obj.x + p.x, obj.y + p.y) for p in obj.polygon or obj.polyline]
                draw_lines(surface, poly_color, obj.is_polygon(), points, 3)
            elif obj.is_tile():
                # tile objects are anchored at their bottom left corner
                image = self.tmj_data.get_tile_image_by_gid(obj.gid)
                surface_blit(image, (obj.x, obj.y - image.get_height()))
            else:
                draw_rect(surface, rect_color,
                          (obj.x, obj.y, obj.width, obj.height), 3)

    def render_image_layer(self, surface, layer):
        if not layer.get_image():
            return
        try:
            image = self.layer_images[layer.get_image()]
        except KeyError:
            path = os.path.join(self.folder, layer.get_image())
            image = pygame.image.load(path)
            transparent = layer.get_transparentcolor()
            if transparent:
                image = image.convert()
                image.set_colorkey(transparent.as_tuple())
            else:
                image = image.convert_alpha()
            self.layer_images[layer.get_image()] = image
        surface.blit(image, (layer.offsetx, layer.offsety))


class SimpleTest(object):
    def __init__(self, filename):
        self.renderer = None
        self.running = False
        self.dirty = False
        self.exit_status = 0
        self.load_map(filename)

    def load_map(self, filename):
        self.renderer = TiledRenderer(filename)

        logger.info("Objects in map:")
        for obj in self.renderer.tmj_data.tmjmap.objects:
            logger.info(obj)
            for k, v in obj.properties_as_dict().items():
                logger.info("%s\t%s", k, v)

    def draw(self, surface):
        temp = pygame.Surface(self.renderer.pixel_size)
        self.renderer.render_map(temp)
        pygame.transform.smoothscale(temp, surface.get_size(), surface)
        f = pygame.font.Font(pygame.font.get_default_font(), 20)
        i = f.render('press any key for next map or ESC to quit',
                     1, (180, 180, 0))
        surface.blit(i, (0, 0))

    def handle_input(self):
        try:
            event = pygame.event.wait()

            if event.type == QUIT:
                self.exit_status = 0
                self.running = False

            elif event.type == KEYDOWN:
                if event.key == K_ESCAPE:
                    self.exit_status = 0
                    self.running = False
                else:
                    self.running = False

            elif event.type == VIDEORESIZE:
                init_screen(event.w, event.h)
                self.dirty = True

        except KeyboardInterrupt:
            self.exit_status = 0
            self.running = False

    def run(self, screen):
        """ This is our app main loop
        """
        self.dirty = True
        self.running = True
        self.exit_status = 1
        clock = pygame.time.Clock()

        while self.running:
            clock.tick(10)
            self.handle_input()
            if self.dirty:
                self.draw(screen)
                self.dirty = False
            pygame.display.flip()

        return self.exit_status


def main(filenames):
    pygame.init()
    pygame.font.init()
    screen = init_screen(600, 600)
    pygame.display.set_caption('render')
    logging.basicConfig(level=logging.DEBUG)

    if not filenames:
        filenames = sorted(glob.glob(os.path.join('data', '*.tmj')) +
                           glob.glob(os.path.join('data', '*.json')))

    try:
        for filename in filenames:
            logger.info("Testing %s", filename)
            if not SimpleTest(filename).run(screen):
                break
    finally:
        pygame.quit()


if __name__ == '__main__':
    main(sys.argv[1:])
