"""Call to Action — prominent CTA band with custom colours."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="cta_section",
    name="Call to Action",
    description="Prominent call-to-action section with background",
    category="business",
    icon="📢",
    preview="/previews/cta-section.jpg",
    default_data={
        "title": "Ready to Get Started?",
        "description": "Contact us today for a free consultation and quote.",
        "ctaText": "Contact Us Now",
        "ctaLink": "/contact",
        "backgroundColor": "#1f2937",
        "textColor": "#ffffff",
    },
    fields=[
        ComponentField(key="title", label="Title", type="text", required=True),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(key="ctaText", label="Button Text", type="text"),
        ComponentField(key="ctaLink", label="Button Link", type="url"),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
        ComponentField(key="textColor", label="Text Color", type="color"),
    ],
)
