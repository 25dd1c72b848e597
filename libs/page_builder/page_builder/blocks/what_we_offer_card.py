"""What We Offer — ticked list of offerings beside (or under) an image."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

DEFINITION = ComponentDefinition(
    type="what_we_offer_card",
    name="What We Offer",
    description="Card listing services with tick marks and an optional image",
    category="content",
    icon="✅",
    preview="/previews/what-we-offer.jpg",
    default_data={
        "title": "What We Offer",
        "subtitle": "Our comprehensive services and capabilities",
        "items": [
            {"text": "Contract packing and re-packing"},
            {"text": "Product assembly and kitting"},
            {"text": "Labelling and shrink wrapping"},
        ],
        "cardStyle": "default",
        "layout": "split",
        "image": "",
        "showCTA": True,
        "ctaText": "Learn More",
        "ctaLink": "/contact",
    },
    fields=[
        ComponentField(key="title", label="Title", type="text"),
        ComponentField(key="subtitle", label="Subtitle", type="text"),
        ComponentField(
            key="items", label="Items", type="array",
            array_fields=[ComponentField(key="text", label="Text", type="text", required=True)],
        ),
        ComponentField(
            key="cardStyle", label="Card Style", type="select",
            options=[
                FieldOption(label="Default", value="default"),
                FieldOption(label="Gradient", value="gradient"),
                FieldOption(label="Bordered", value="bordered"),
            ],
        ),
        ComponentField(
            key="layout", label="Layout", type="select",
            options=[FieldOption(label="Split", value="split"), FieldOption(label="Stacked", value="stacked")],
        ),
        ComponentField(key="image", label="Image", type="image"),
        ComponentField(key="showCTA", label="Show Button", type="boolean"),
        ComponentField(key="ctaText", label="Button Text", type="text"),
        ComponentField(key="ctaLink", label="Button Link", type="url"),
    ],
)
