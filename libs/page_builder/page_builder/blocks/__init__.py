"""
Built-in block catalog — one module per component type, each exposing DEFINITION.
Order here is the order of the component picker.
"""
from .hero_banner import DEFINITION as HERO_BANNER
from .hero_split import DEFINITION as HERO_SPLIT
from .feature_grid import DEFINITION as FEATURE_GRID
from .testimonials import DEFINITION as TESTIMONIALS
from .cta_section import DEFINITION as CTA_SECTION
from .stats_section import DEFINITION as STATS_SECTION
from .image_gallery import DEFINITION as IMAGE_GALLERY
from .team_profiles import DEFINITION as TEAM_PROFILES
from .contact_section import DEFINITION as CONTACT_SECTION
from .faq_section import DEFINITION as FAQ_SECTION
from .process_steps import DEFINITION as PROCESS_STEPS
from .what_we_offer_card import DEFINITION as WHAT_WE_OFFER_CARD

BUILTIN_DEFINITIONS = [
    HERO_BANNER,
    HERO_SPLIT,
    FEATURE_GRID,
    TESTIMONIALS,
    CTA_SECTION,
    STATS_SECTION,
    IMAGE_GALLERY,
    TEAM_PROFILES,
    CONTACT_SECTION,
    FAQ_SECTION,
    PROCESS_STEPS,
    WHAT_WE_OFFER_CARD,
]

__all__ = [
    "HERO_BANNER", "HERO_SPLIT", "FEATURE_GRID", "TESTIMONIALS", "CTA_SECTION",
    "STATS_SECTION", "IMAGE_GALLERY", "TEAM_PROFILES", "CONTACT_SECTION",
    "FAQ_SECTION", "PROCESS_STEPS", "WHAT_WE_OFFER_CARD",
    "BUILTIN_DEFINITIONS",
]
