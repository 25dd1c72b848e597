"""Contact Information — contact details, optional map/form and social links."""
from ..core.schemas import ComponentDefinition, ComponentField, FieldOption

DEFINITION = ComponentDefinition(
    type="contact_section",
    name="Contact Information",
    description="Contact details with map and contact form",
    category="business",
    icon="📞",
    preview="/previews/contact-section.jpg",
    default_data={
        "title": "Get in Touch",
        "description": "Ready to discuss your packaging needs? Contact us today.",
        "contactInfo": {
            "phone": "+1 (555) 123-4567",
            "email": "info@naturesforce.com",
            "address": "123 Business St, City, State 12345",
        },
        "showMap": True,
        "showContactForm": True,
        "socialLinks": [],
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="description", label="Description", type="textarea"),
        ComponentField(
            key="contactInfo", label="Contact Details", type="object",
            object_fields=[
                ComponentField(key="phone", label="Phone Number", type="text"),
                ComponentField(key="email", label="Email Address", type="text"),
                ComponentField(key="address", label="Physical Address", type="textarea"),
            ],
        ),
        ComponentField(key="showMap", label="Show Map", type="boolean"),
        ComponentField(key="showContactForm", label="Show Contact Form", type="boolean"),
        ComponentField(
            key="socialLinks", label="Social Links", type="array",
            array_fields=[
                ComponentField(
                    key="icon", label="Platform", type="select",
                    options=[
                        FieldOption(label="LinkedIn", value="linkedin"),
                        FieldOption(label="Facebook", value="facebook"),
                        FieldOption(label="Instagram", value="instagram"),
                        FieldOption(label="Twitter / X", value="twitter"),
                    ],
                ),
                ComponentField(key="url", label="Profile URL", type="url", required=True),
            ],
        ),
        ComponentField(key="backgroundColor", label="Background Color", type="color"),
    ],
)
