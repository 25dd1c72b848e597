"""Process Steps — numbered how-it-works steps (vertical, horizontal or grid)."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

STEP_ICONS = ("consultation", "quote", "production", "delivery", "support")

DEFINITION = ComponentDefinition(
    type="process_steps",
    name="Process Steps",
    description="Step-by-step explanation of how working with us goes",
    category="content",
    icon="🪜",
    preview="/previews/process-steps.jpg",
    default_data={
        "title": "How It Works",
        "subtitle": "Our Process",
        "steps": [
            {"title": "Consultation", "description": "We discuss your packing requirements.", "icon": "consultation"},
            {"title": "Quote", "description": "You receive a detailed, transparent quote.", "icon": "quote"},
            {"title": "Production", "description": "Your products are packed to specification.", "icon": "production"},
            {"title": "Delivery", "description": "Finished goods are dispatched on schedule.", "icon": "delivery"},
        ],
        "layout": "vertical",
        "showNumbers": True,
        "showIcons": False,
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="subtitle", label="Section Subtitle", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(
            key="steps", label="Steps", type="array", min=1,
            array_fields=[
                ComponentField(key="title", label="Title", type="text", required=True),
                ComponentField(key="description", label="Description", type="textarea"),
                ComponentField(
                    key="icon", label="Icon", type="select",
                    options=[FieldOption(label=name.title(), value=name) for name in STEP_ICONS],
                ),
            ],
        ),
        ComponentField(
            key="layout", label="Layout", type="select",
            options=[
                FieldOption(label="Vertical", value="vertical"),
                FieldOption(label="Horizontal", value="horizontal"),
                FieldOption(label="Grid", value="grid"),
            ],
        ),
        ComponentField(key="showNumbers", label="Show Step Numbers", type="boolean"),
        ComponentField(key="showIcons", label="Show Icons", type="boolean"),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
