"""Team Profiles — member cards with photo, role and links."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="team_profiles",
    name="Team Profiles",
    description="Team member cards with photos and information",
    category="business",
    icon="👥",
    preview="/previews/team-profiles.jpg",
    default_data={
        "title": "Meet Our Team",
        "subtitle": "The experts behind our success",
        "members": [
            {"name": "Jane Doe", "position": "Operations Manager", "image": "",
             "bio": "Leading our operations with over 10 years of experience.",
             "linkedin": "", "email": ""},
        ],
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="subtitle", label="Section Subtitle", type="text"),
        ComponentField(
            key="members", label="Members", type="array",
            array_fields=[
                ComponentField(key="name", label="Name", type="text", required=True),
                ComponentField(key="position", label="Position", type="text"),
                ComponentField(key="image", label="Photo", type="image"),
                ComponentField(key="bio", label="Bio", type="textarea"),
                ComponentField(key="linkedin", label="LinkedIn URL", type="url"),
                ComponentField(key="email", label="Email", type="text"),
            ],
        ),
    ],
)
