import logging

import pygame

from metamorphosis.exceptions import AssetError

logger = logging.getLogger(__name__)


class ImageLoader:
    """Class responsible for loading and caching images."""
    cache = {}

    @staticmethod
    def load_image(filename):
        """Load an image from a file.

        Raises:
            AssetError: If the file is missing or not a readable image
        """
        if filename in ImageLoader.cache:
            return ImageLoader.cache[filename]
        try:
            image = pygame.image.load(filename)
        except (pygame.error, OSError) as e:
            raise AssetError(f"Couldn't load image: {filename}") from e

        # Alpha conversion needs a display; headless loads keep the raw surface
        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        ImageLoader.cache[filename] = image
        return image

    @staticmethod
    def load_optional(filename):
        """Load an image, returning None (and logging) when it is unavailable."""
        try:
            return ImageLoader.load_image(filename)
        except AssetError as e:
            logger.warning("%s; drawing a vector placeholder instead", e)
            return None
