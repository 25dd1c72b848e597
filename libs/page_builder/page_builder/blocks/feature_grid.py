"""Feature Grid — three-column grid of services/features."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="feature_grid",
    name="Feature Grid",
    description="3-column grid showcasing features or services",
    category="content",
    icon="🏗️",
    preview="/previews/feature-grid.jpg",
    default_data={
        "title": "Our Services",
        "subtitle": "What we offer",
        "features": [
            {"icon": "📦", "title": "Contract Packing",
             "description": "Professional packaging services for all your products."},
            {"icon": "🚚", "title": "Logistics Support",
             "description": "End-to-end logistics and distribution solutions."},
            {"icon": "🔍", "title": "Quality Control",
             "description": "Rigorous quality checks ensure perfect results."},
        ],
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="subtitle", label="Section Subtitle", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(
            key="features", label="Features", type="array",
            array_fields=[
                ComponentField(key="icon", label="Icon (emoji)", type="text"),
                ComponentField(key="image", label="Icon Image", type="image", description="Replaces the emoji when set"),
                ComponentField(key="title", label="Title", type="text", required=True),
                ComponentField(key="description", label="Description", type="textarea"),
                ComponentField(key="link", label="Link", type="url"),
            ],
        ),
        ComponentField(key="ctaText", label="Button Text", type="text"),
        ComponentField(key="ctaLink", label="Button Link", type="url"),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
