"""Testimonials — customer quotes in a card layout."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="testimonials",
    name="Testimonials",
    description="Customer testimonials in an elegant card layout",
    category="social",
    icon="💬",
    preview="/previews/testimonials.jpg",
    default_data={
        "title": "What Our Clients Say",
        "testimonials": [
            {"name": "John Smith", "company": "ABC Manufacturing",
             "text": "NaturesForce has been our trusted packaging partner for over 5 years.",
             "image": "", "rating": 5},
            {"name": "Sarah Johnson", "company": "XYZ Products",
             "text": "Exceptional service and attention to detail. Highly recommended!",
             "image": "", "rating": 5},
        ],
    },
    fields=[
        ComponentField(key="subtitle", label="Eyebrow Text", type="text"),
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(
            key="testimonials", label="Testimonials", type="array",
            array_fields=[
                ComponentField(key="name", label="Client Name", type="text", required=True),
                ComponentField(key="position", label="Position", type="text"),
                ComponentField(key="company", label="Company", type="text"),
                ComponentField(key="text", label="Quote", type="textarea", required=True),
                ComponentField(key="image", label="Photo", type="image"),
                ComponentField(key="rating", label="Rating", type="number", min=1, max=5),
                ComponentField(key="featured", label="Featured", type="boolean"),
            ],
        ),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
