"""FAQ Accordion — collapsible questions and answers."""
from ..core.schemas import ComponentDefinition, ComponentField

DEFINITION = ComponentDefinition(
    type="faq_section",
    name="FAQ Accordion",
    description="Frequently asked questions in collapsible format",
    category="interactive",
    icon="❓",
    preview="/previews/faq-section.jpg",
    default_data={
        "title": "Frequently Asked Questions",
        "subtitle": "Everything you need to know about our services",
        "faqs": [
            {"question": "What types of products do you package?",
             "answer": "We handle a wide variety of products including consumer goods, "
                       "food items, electronics, and more."},
            {"question": "What is your typical turnaround time?",
             "answer": "Our standard turnaround time is 3-5 business days, depending on "
                       "the complexity and volume of the project."},
        ],
    },
    fields=[
        ComponentField(key="title", label="Section Title", type="text"),
        ComponentField(key="subtitle", label="Section Subtitle", type="text"),
        ComponentField(
            key="faqs", label="FAQs", type="array",
            array_fields=[
                ComponentField(key="question", label="Question", type="text", required=True),
                ComponentField(key="answer", label="Answer", type="textarea", required=True),
            ],
        ),
    ],
)
