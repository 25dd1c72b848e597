"""Hero Banner — full-width hero with background image, title and two CTAs."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

DEFINITION = ComponentDefinition(
    type="hero_banner",
    name="Hero Banner",
    description="Full-width hero section with background image, title, and CTA",
    category="hero",
    icon="🎯",
    preview="/previews/hero-banner.jpg",
    default_data={
        "title": "Welcome to NaturesForce",
        "subtitle": "Premium Contract Packing Services",
        "description": "We provide reliable, efficient contract packing solutions for your business needs.",
        "badge": "Trusted Since 2020",
        "backgroundImage": "",
        "ctaText": "Get Started",
        "ctaLink": "/contact",
        "secondaryCtaText": "Learn More",
        "secondaryCtaLink": "/about",
        "trustText": "Trusted by 500+ Australian businesses",
        "textAlign": "center",
        "overlayOpacity": 0.85,
    },
    fields=[
        ComponentField(key="badge", label="Badge Text", type="text", description="Small badge/label above the title"),
        ComponentField(key="title", label="Main Title", type="text", required=True),
        ComponentField(key="subtitle", label="Subtitle", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(key="backgroundImage", label="Background Image", type="image"),
        ComponentField(key="ctaText", label="Primary Button Text", type="text"),
        ComponentField(key="ctaLink", label="Primary Button Link", type="url"),
        ComponentField(key="secondaryCtaText", label="Secondary Button Text", type="text"),
        ComponentField(key="secondaryCtaLink", label="Secondary Button Link", type="url"),
        ComponentField(key="trustText", label="Trust Indicator Text", type="text", description="Small text below buttons"),
        ComponentField(
            key="textAlign", label="Text Alignment", type="select",
            options=[
                FieldOption(label="Left", value="left"),
                FieldOption(label="Center", value="center"),
                FieldOption(label="Right", value="right"),
            ],
        ),
        ComponentField(
            key="overlayOpacity", label="Overlay Opacity", type="number", min=0, max=1,
            description="Controls background overlay darkness (0-1)",
        ),
    ],
)
