"""Image Gallery — responsive grid of images with optional captions."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

DEFINITION = ComponentDefinition(
    type="image_gallery",
    name="Image Gallery",
    description="Responsive image gallery with lightbox functionality",
    category="media",
    icon="🖼️",
    preview="/previews/image-gallery.jpg",
    default_data={
        "title": "Our Facilities",
        "subtitle": "Take a look at our state-of-the-art packaging facilities",
        "images": [],
        "columns": "3",
        "spacing": "normal",
    },
    fields=[
        ComponentField(key="title", label="Gallery Title", type="text"),
        ComponentField(key="subtitle", label="Gallery Subtitle", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(
            key="columns", label="Columns", type="select",
            options=[
                FieldOption(label="2 Columns", value="2"),
                FieldOption(label="3 Columns", value="3"),
                FieldOption(label="4 Columns", value="4"),
            ],
        ),
        ComponentField(
            key="spacing", label="Spacing", type="select",
            options=[
                FieldOption(label="Tight", value="tight"),
                FieldOption(label="Normal", value="normal"),
                FieldOption(label="Loose", value="loose"),
            ],
        ),
        ComponentField(
            key="images", label="Images", type="array",
            array_fields=[
                ComponentField(key="src", label="Image", type="image", required=True),
                ComponentField(key="alt", label="Alt Text", type="text"),
                ComponentField(key="title", label="Caption Title", type="text"),
                ComponentField(key="description", label="Caption", type="textarea"),
            ],
        ),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
