"""Statistics — headline numbers (1 to 6)."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="stats_section",
    name="Statistics",
    description="Display impressive business statistics and achievements",
    category="business",
    icon="📊",
    preview="/previews/stats-section.jpg",
    default_data={
        "title": "Our Track Record",
        "stats": [
            {"number": "500+", "label": "Happy Clients"},
            {"number": "10M+", "label": "Packages Delivered"},
            {"number": "15+", "label": "Years Experience"},
            {"number": "99.9%", "label": "Quality Rate"},
        ],
        "backgroundColor": "#f9fafb",
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(
            key="stats", label="Stats", type="array", min=1, max=6,
            array_fields=[
                ComponentField(key="number", label="Number", type="text", required=True, placeholder="500+"),
                ComponentField(key="label", label="Label", type="text", required=True),
            ],
        ),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
