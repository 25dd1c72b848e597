"""NaturesForce CMS — pages, media library and site settings on top of page_builder."""
__version__ = "1.0.0"
