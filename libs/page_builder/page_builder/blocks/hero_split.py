"""Split Hero — two columns, image on one side and content on the other."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

DEFINITION = ComponentDefinition(
    type="hero_split",
    name="Split Hero",
    description="Two-column hero with image on one side, content on the other",
    category="hero",
    icon="⚡",
    preview="/previews/hero-split.jpg",
    default_data={
        "title": "Professional Contract Packing",
        "description": "Expert packaging solutions tailored to your business requirements. "
                       "Quality, efficiency, and reliability guaranteed.",
        "image": "",
        "ctaText": "Learn More",
        "ctaLink": "/services",
        "imagePosition": "right",
        "backgroundColor": "#ffffff",
    },
    fields=[
        ComponentField(key="badge", label="Badge Text", type="text"),
        ComponentField(key="title", label="Title", type="text", required=True),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(key="image", label="Hero Image", type="image"),
        ComponentField(key="ctaText", label="Button Text", type="text"),
        ComponentField(key="ctaLink", label="Button Link", type="url"),
        ComponentField(key="secondaryCtaText", label="Secondary Button Text", type="text"),
        ComponentField(key="secondaryCtaLink", label="Secondary Button Link", type="url"),
        ComponentField(
            key="imagePosition", label="Image Position", type="select",
            options=[FieldOption(label="Left", value="left"), FieldOption(label="Right", value="right")],
        ),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
        ComponentField(
            key="features", label="Highlights", type="array", max=3,
            description="Up to three short trust indicators under the buttons",
            array_fields=[ComponentField(key="title", label="Text", type="text")],
        ),
    ],
)
