"""Parody page reconstruction and theme stylesheets."""

from parody.services.reconstruction.reconstructor import SiteReconstructor, reconstruct_site
from parody.services.reconstruction.themes import THEME_CSS, theme_stylesheet

__all__ = [
    "SiteReconstructor",
    "THEME_CSS",
    "reconstruct_site",
    "theme_stylesheet",
]
